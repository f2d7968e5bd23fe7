"""
Core Infrastructure for CiteForge.

The innermost layer: every other package depends on it, and it depends on
no other CiteForge package.

Architecture Position
---------------------
    CLI (outermost)
      └── Render (Python-Markdown extension, page renderer)
            └── Citation (store, resolver, bibliography, formatter)
                  └── **Core** (innermost - you are here)

Components
----------
**Configuration (config/, config_loaders.py)**
    Nested dataclasses loaded from citeforge.yaml with ${VAR} expansion
    and environment overrides.

**Logging (logging.py)**
    Structured logging with key/value fields and a per-page pass logger.

**Exceptions (exceptions.py)**
    CiteForgeError hierarchy with error codes and fix suggestions.

**Constants (constants.py)**
    Defaults shared by configuration and the citation engine.
"""
