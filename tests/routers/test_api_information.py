from seqslice import __project__, __version__


def test_show_version(client):
    resp = client.get("/api/v1/api/version")

    assert resp.status_code == 200
    assert resp.json() == {"name": __project__, "version": __version__}
