"""mono - coordinated version releases for monorepo modules."""

__version__ = "0.3.0"
