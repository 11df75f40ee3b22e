"""
nucleus.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- The default diagnostic sink that keeps the library silent.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Library code only ever logs through `Settings.logger`; nothing here runs at import time.
