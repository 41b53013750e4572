"""Desktop bootstrap for a fresh Kubuntu machine (Python-first, step-driven).

Core design goals:
- Idempotent steps guarded by presence checks
- Safe to re-run: satisfied steps are skipped
- Explicit per-step failure policy (critical vs best-effort)
- Timed steps and a structured run report
- Centralized logging
"""

__all__ = []
