"""Use-case layer for the weather client workflows.

Each module is a single-call workflow over the domain ports; none performs
transport I/O directly or keeps UI state.
"""
