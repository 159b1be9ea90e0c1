"""Strategy tracker core.

This package contains the computation core for tracking a single portfolio
against its strategic plan:

- triggers: market indicators to categorized alert states
- portfolio: valued positions, allocations vs target, totals, proceeds split
- decisions: alignment oracle, adherence score, snapshots and recording
- persistence: collaborator boundary (interfaces)
- storage: in-memory implementations of the collaborator interfaces
- config: strategy constants and runtime settings

Everything under `triggers`, `portfolio` and `decisions` is pure and
synchronous. I/O lives behind `persistence` interfaces.
"""
