"""cso-proxy: serve Container Security Operator vulnerability reports from a Harbor registry."""

__version__ = "0.1.0"
