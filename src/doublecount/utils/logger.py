"""Simple module which defines the logging style and returns the logger."""

import logging
import sys
import warnings

# Configure the formatting of the logger
logging.basicConfig(format="%(message)s", stream=sys.stdout)

# Capture warning messages and redirect them through the logger
logging.captureWarnings(True)

# Initialize logger
logger = logging.getLogger("doublecount")

# Configure the warnings package to only issue each warning once
warnings.simplefilter("once")
