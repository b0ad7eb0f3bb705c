"""
Global constants for Genie Patcher.
Contains build info, path configuration and process exit codes.
"""

import os

# **************************************************************** #
#                       Build Info                                     #
# **************************************************************** #
APP_VERSION = "0.1.0"
APP_NAME = "genie-patcher"

# **************************************************************** #
#                       Environment Detection                        #
# **************************************************************** #
DEV_MODE = os.getenv("DEV_MODE", "false").lower() == "true"

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))

# **************************************************************** #
#                       Path Configuration                           #
# **************************************************************** #
if DEV_MODE:
    TEMP_LOG_DIR = os.path.join(SCRIPT_DIR, "..", "workdir")
    CONFIG_FILE = os.path.join(SCRIPT_DIR, "..", "workdir", "config.json")
else:
    TEMP_LOG_DIR = os.path.join(os.path.expanduser("~"), ".genie_patcher")
    CONFIG_FILE = os.path.join(TEMP_LOG_DIR, "config.json")

LOG_FILE = os.path.join(TEMP_LOG_DIR, "error.log")

# **************************************************************** #
#                       Exit Codes                                   #
# **************************************************************** #
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2  # argparse
EXIT_INVALID_CODE = 32  # code contains a symbol outside the alphabet
