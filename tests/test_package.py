"""Basic tests for gofr_dotenv package."""


def test_import_gofr_dotenv():
    """Test that gofr_dotenv can be imported."""
    import gofr_dotenv

    assert hasattr(gofr_dotenv, "__version__")
    assert gofr_dotenv.__version__ == "1.0.0"


def test_version_format():
    """Test that version follows semver format."""
    import gofr_dotenv

    parts = gofr_dotenv.__version__.split(".")
    assert len(parts) == 3
    assert all(p.isdigit() for p in parts)


def test_public_api():
    """Test that the main operations are exported at package level."""
    import gofr_dotenv

    for name in ("load", "overload", "load_env", "parse", "merge", "apply", "expand"):
        assert callable(getattr(gofr_dotenv, name))
