"""
Scheduler bridge: session cookie codec, reasoning-backend proxy and calendar
event normalization behind a FastAPI app (``scheduler_bridge.main:app``).
"""
__all__: list[str] = ["main"]
