"""Testing utilities for spaserve applications.

Usage::

    from spaserve.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/")
        assert response.status == 200
"""

from spaserve.testing.client import TestClient

__all__ = ["TestClient"]
