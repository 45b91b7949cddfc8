"""Booth workstation setup (Python-first, step-driven).

Core design goals:
- Idempotent steps, safe to re-run end to end
- One declarative configuration document, validated up front
- Narrow collaborator interfaces around external tools
- Non-fatal steps with a final advisory verification
- Centralized logging
"""

__all__ = []
