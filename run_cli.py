"""
Run the User Directory CLI.

Usage:
    python run_cli.py [COMMAND] [OPTIONS]

Commands:
    login      Sign in and save the token locally (~/.user-directory/session.json)
    logout     Clear the stored token
    status     Show whether a session is active
    users      List one page of users            (requires login)
    edit       Edit a user on a given page        (requires login)
    delete     Delete a user on a given page      (requires login)

Examples:
    python run_cli.py login --email eve.holt@reqres.in
    python run_cli.py users --page 2
    python run_cli.py delete 7 --page 2

Environment variables (all optional):
    DIRECTORY_API_URL       Base URL of the directory service (default: https://reqres.in/api)
    DIRECTORY_API_KEY       Sent as the x-api-key header when set
    DIRECTORY_API_TIMEOUT   Per-request timeout in seconds (default: 10)
    SESSION_FILE            Token file (default: ~/.user-directory/session.json)
    LOG_LEVEL               DEBUG, INFO, WARNING (default), ERROR
"""

import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from adapters.cli.main import app

if __name__ == "__main__":
    app()
