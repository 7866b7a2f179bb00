"""
Pydantic models for the Fabricator application.

This module contains the models used for the upstream chat completion API,
the prompts sent to it, and the error bodies returned to callers.
"""

from fabricator.models.errors import *
from fabricator.models.openai import *
from fabricator.models.prompts import *
