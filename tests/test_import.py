"""Basic import tests to verify package structure."""


def test_import_rtlsim():
    """Verify main package imports."""
    import rtlsim
    assert rtlsim.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from rtlsim import core
    assert hasattr(core, "Simulator")
    assert hasattr(core, "Register")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from rtlsim import analysis
    assert hasattr(analysis, "__doc__")


def test_import_viz():
    """Verify viz module structure exists."""
    from rtlsim import viz
    assert hasattr(viz, "plot_waveform")
