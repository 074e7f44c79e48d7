"""Thread pool with pluggable FIFO, priority and dependency-graph schedulers."""

__version__ = "0.1.0"
__all__ = ["base", "dag", "demo", "fifo", "logger", "pool", "priority", "thread", "thread_meta"]