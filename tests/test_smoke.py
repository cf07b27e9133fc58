import run_bootstrap
import run_calibration
import run_index_inspection


def test_calibration_script_prints_fixed_labels(capsys):
    results = run_calibration.main()
    out = capsys.readouterr().out
    assert len(results) == 3
    assert "case 1 : calibrate all involved parameters (HW1F : reversion, sigma)" in out
    assert "fixed reversion: 0.05" in out
    assert "fixed sigma: 0.01" in out
    assert out.count("calibrated sigma:") == 2
    assert out.count("calibrated reversion:") == 2


def test_index_script_is_silent_by_default(capsys):
    descriptors = run_index_inspection.main()
    assert len(descriptors) == 3
    assert capsys.readouterr().out == ""


def test_bootstrap_script_runs(capsys):
    report = run_bootstrap.main()
    out = capsys.readouterr().out
    assert len(report) == 14
    assert "0.1375:" in out
    assert "discount Rate" in out
