"""simple-dot dotfiles installer.

Core design goals:
- Prompt-gated, linear workflow
- Idempotent steps (state inferred from the filesystem)
- Fail fast on the first failing external command
- External tools behind small interfaces
- Centralized logging
"""

__all__ = []
