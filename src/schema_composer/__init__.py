"""Schema composition engine for declared data types."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
