"""Application layer: timers, task runners, and stateful coordinators.

Modules here hold the asynchronous coordination of the weather view (debounce,
staleness checks, polling) and the wiring of adapters into use cases. They
never render anything; view models and the web runtime sit on top.
"""
