"""
DevConnector core package.

Configuration, persistence, security helpers and the services behind the
HTTP API in ``backend.app``.
"""

__version__ = "1.0.0"
