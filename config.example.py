# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.

Run with:  TASKFLOW_LOAD_DELAY_SECONDS=0 taskflow
"""

ENV_VARS = {
    # App / logging
    "TASKFLOW_APP_NAME": "App display name (default: taskflow).",
    "TASKFLOW_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TASKFLOW_CONSOLE_ENABLED": "Run the console REPL after loading (true/false, default: true).",
    # Local data
    "TASKFLOW_DATA_DIR": "Directory for logs and local storage (default: .local/taskflow).",
    "TASKFLOW_STORAGE_PATH": "JSON file holding the persisted session (default: <data_dir>/local_storage.json).",
    "TASKFLOW_SESSION_KEY": "Key of the session record inside local storage (default: currentUser).",
    # Loading
    "TASKFLOW_LOAD_DELAY_SECONDS": "Simulated delay before the demo dataset appears (default: 1.0).",
    # Views
    "TASKFLOW_DUE_SOON_DAYS": "Window for the 'due soon' list (default: 7).",
    "TASKFLOW_TASKS_PER_PAGE": "Tasks per page (default: 12).",
    "TASKFLOW_PROJECTS_PER_PAGE": "Projects per page (default: 9).",
    "TASKFLOW_EMPLOYEES_PER_PAGE": "Team members per page (default: 12).",
}
