"""autotask: task catalog and relation graph queries."""

__version__ = "0.1.0"
