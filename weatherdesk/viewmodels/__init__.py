"""ViewModel package for UI state and command surfaces.

Call context:
    ``weatherdesk.web_ui.runtime`` imports concrete viewmodels from this
    package to bind page callbacks to state transitions.

Responsibilities:
    - Expose mutable UI state and command intent callbacks.
    - Transform domain objects into view-facing rows.
    - Keep transport out: network work is reached only through injected
      use-case callables and task runners.
"""
