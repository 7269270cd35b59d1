"""TubeBrief backend: YouTube channel subscriptions and per-video summaries."""

__version__ = "0.1.0"
