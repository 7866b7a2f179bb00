"""
Fabricator - a fake REST API backed by a language model

Any path requested from the server is treated as a resource name and the
model is asked to invent a JSON document describing it.
"""
