"""
Core infrastructure for termcards.

Components
----------
**Configuration (config.py)**
    Nested dataclasses loaded from .termcards/config.yaml with
    ${VAR} expansion and TERMCARDS_* environment overrides.

**Logging (logging.py)**
    Structured logging with context binding, rich console output.

**Exceptions (exceptions.py)**
    TermcardsError hierarchy; every error explains why it happened
    and how to fix it.

The core layer imports nothing else from termcards.
"""
