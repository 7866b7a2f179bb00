#!/usr/bin/env python3
import json
import requests
import argparse
import sys
import colorama
from colorama import Fore, Style

# Initialize colorama for cross-platform color support
colorama.init()


def main():
    parser = argparse.ArgumentParser(description="Fetch a synthesized endpoint from Fabricator")
    parser.add_argument("path", nargs="?", default="users/42", help="Resource path after /api/")
    parser.add_argument("--host", default="http://localhost:8080", help="Base URL of the Fabricator API")
    parser.add_argument("--fields", default=None, help="Comma-separated list of fields to request")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    args = parser.parse_args()

    url = f"{args.host}/api/{args.path.lstrip('/')}"
    params = {"fields": args.fields} if args.fields else None

    print(f"{Style.BRIGHT}{Fore.CYAN}Synthesized Endpoint Example{Style.RESET_ALL}")
    print("═════════════════════════════════════════")
    print(f"{Style.BRIGHT}URL:{Style.RESET_ALL} {url}")
    print(f"{Style.BRIGHT}Fields:{Style.RESET_ALL} {args.fields or '-'}")
    print("═════════════════════════════════════════")

    log("Requesting endpoint...", "important", args.verbose)
    response = requests.get(url, params=params)

    log(f"Response status: {response.status_code}", "info", args.verbose)
    log(f"Response headers: {dict(response.headers)}", "debug", args.verbose)

    try:
        data = response.json()
    except json.JSONDecodeError:
        log(f"Error parsing response: {response.text}", "error", args.verbose)
        print(response.text)
        sys.exit(1)

    if response.ok:
        print(f"{Style.BRIGHT}{Fore.GREEN}Response:{Style.RESET_ALL}")
        print(json.dumps(data, indent=2))
    else:
        log(f"{data.get('error')}: {data.get('message', '')}", "error", True)
        if data.get("details"):
            log(f"Details: {data['details']}", "error", True)
        sys.exit(1)

    log("Request completed.", "important", args.verbose)


def log(message, level="info", verbose=False):
    """Log a message with appropriate formatting if verbose mode is enabled."""
    if not verbose and level not in ("important", "error"):
        return

    prefix = ""
    if level == "info":
        prefix = f"{Fore.CYAN}[INFO]{Style.RESET_ALL}"
    elif level == "important":
        prefix = f"{Fore.YELLOW}[IMPORTANT]{Style.RESET_ALL}"
    elif level == "error":
        prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}"
    elif level == "debug":
        prefix = f"{Fore.MAGENTA}[DEBUG]{Style.RESET_ALL}"

    print(f"{prefix} {message}")


if __name__ == "__main__":
    main()
