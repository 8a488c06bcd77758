"""Liveness Probe — GET /api/v1/health/ answers without running test groups."""

from evaluation_base import __version__


async def test_liveness(client):
    resp = await client.get("/api/v1/health/")
    assert resp.status_code == 200
    assert resp.json() == {
        "status": "healthy", "service": "evaluation-function", "version": __version__,
    }
