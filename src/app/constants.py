"""
Launcher Constants.
Stores the fixed bundle layout, diagnostics and exit codes.
"""

# Application Identity
APP_NAME = "BundleLauncher"
APP_VERSION = "0.1.0"

# Bundle Layout
RESOURCES_SUFFIX = "/../Resources/app/"
INTERPRETER_PATH = "../libs/bin/python3"
SCRIPT_NAME = "app.py"
CURRENT_DIR = "."

# Configuration Sources
CONFIG_FILENAME = "launcher.toml"
CONFIG_TABLE = "launcher"
DOTENV_FILENAME = ".env"
ENV_PREFIX = "LAUNCHER_"

# Relay
DEFAULT_CHUNK_SIZE = 64 * 1024

# Exit Policies
EXIT_POLICY_REPLICATE = "replicate"
EXIT_POLICY_PROPAGATE = "propagate"
EXIT_POLICIES = (EXIT_POLICY_REPLICATE, EXIT_POLICY_PROPAGATE)

# Exit Codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
SIGNAL_EXIT_BASE = 128

# Diagnostics
DIAG_EMPTY_EXECUTABLE = "executable path is empty"
DIAG_CHDIR_FAILED = "could not enter resources directory: {path}"
DIAG_LAUNCH_FAILED = "could not run: {command}"
DIAG_CHILD_FAILED = "child exited with status {status}"
DIAG_INVALID_CONFIG = "invalid launcher configuration: {reason}"

# Log Messages
LOG_INSIDE = "Inside: %s"
LOG_RUNNING = "Running: %s"
