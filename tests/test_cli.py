"""End-to-end tests of the command line."""

import PIL.Image
import pytest

from grayfractal import cli

SMALL = ["--pixels-wide", "48", "--max-iterations", "64"]


def test_writes_default_output_in_cwd(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert cli.main(SMALL) == 0

    assert capsys.readouterr().out.strip() == "Success!"
    with PIL.Image.open(tmp_path / "mandelbrot.jpg") as written:
        assert written.format == "JPEG"
        assert written.size == (48, 48)


def test_writes_requested_output(tmp_path, capsys):
    output = tmp_path / "view.png"

    assert cli.main([*SMALL, "--center-x", "-0.75", "--size", "1.5", "--output", str(output)]) == 0

    assert "Success!" in capsys.readouterr().out
    with PIL.Image.open(output) as written:
        assert written.mode == "L"


def test_format_appended_to_suffixless_output(tmp_path, capsys):
    assert cli.main([*SMALL, "--output", str(tmp_path / "view"), "--format", "png"]) == 0
    assert (tmp_path / "view.png").exists()


def test_python_backend_and_imageio_encoder(tmp_path, capsys):
    output = tmp_path / "looped.png"
    args = [*SMALL, "--backend", "python", "--encoder", "imageio", "--output", str(output)]

    assert cli.main(args) == 0
    assert output.exists()


def test_failed_write_is_reported_not_fatal(tmp_path, capsys):
    output = tmp_path / "missing" / "view.png"

    with pytest.warns(RuntimeWarning):
        assert cli.main([*SMALL, "--output", str(output)]) == 0

    assert capsys.readouterr().out.strip() == "Failed to write out file"


def test_verbose_logs_progress(tmp_path, capsys):
    assert cli.main([*SMALL, "--output", str(tmp_path / "v.png"), "-v"]) == 0
    out = capsys.readouterr().out
    assert "Rendering 48x48 pixels" in out
    assert "Success!" in out


@pytest.mark.parametrize(
    "args",
    [
        ["--pixels-wide", "0"],
        ["--max-iterations", "-3"],
        ["--size", "0"],
        ["--size", "-2.0"],
    ],
)
def test_invalid_parameters_exit_with_usage_error(args, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(args)
    assert excinfo.value.code == 2
    assert "must be positive" in capsys.readouterr().err


def test_mismatched_format_rejected(tmp_path, capsys):
    with pytest.raises(SystemExit):
        cli.main([*SMALL, "--output", str(tmp_path / "view.png"), "--format", "jpg"])
    assert "does not match --format" in capsys.readouterr().err


def test_directory_output_rejected(tmp_path, capsys):
    with pytest.raises(SystemExit):
        cli.main([*SMALL, "--output", str(tmp_path)])
    assert "not a directory" in capsys.readouterr().err


def test_root_script_delegates_to_package_cli():
    import render

    assert render.main is cli.main
