import sys
from pathlib import Path
from textwrap import dedent

import pytest

from zoneflect import DEFAULT_ZONE, get_class, scan_directory, scan_file
from zoneflect.options import set_zoneflect_option

_MODELS = dedent(
    """
    import zoneflect as zf

    Table = zf.DecoratorGenerator()


    @Table.class_decorator({"table": "{name}"})
    class {name}:
        def save(self):
            pass
    """
)


def _write_model(path: Path, name: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_MODELS.replace("{name}", name), encoding="utf-8")
    return path


@pytest.mark.smoke
def test_scan_file_runs_decorators(tmp_path: Path):
    module = scan_file(_write_model(tmp_path / "bunny.py", "Bunny"))

    bunny = get_class(module.Bunny)

    assert bunny.is_decorated
    assert bunny.get_context(DEFAULT_ZONE, "table") == "Bunny"
    assert module.__name__ in sys.modules


def test_scan_file_loads_once(tmp_path: Path):
    path = _write_model(tmp_path / "hare.py", "Hare")

    assert scan_file(path) is scan_file(str(path))


def test_scan_file_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError, match="Specified file not found"):
        scan_file(tmp_path / "missing.py")

    with pytest.raises(ValueError, match="got a directory"):
        scan_file(tmp_path)


def test_scan_file_failure_is_not_cached(tmp_path: Path):
    path = tmp_path / "broken.py"
    path.write_text("raise RuntimeError('broken module')\n", encoding="utf-8")
    modules_before = set(sys.modules)

    with pytest.raises(RuntimeError, match="broken module"):
        scan_file(path)

    assert set(sys.modules) == modules_before

    path.write_text("value = 1\n", encoding="utf-8")
    assert scan_file(path).value == 1


def test_scan_directory_recurses(tmp_path: Path):
    _write_model(tmp_path / "models" / "bunny.py", "Bunny")
    _write_model(tmp_path / "models" / "wild" / "hare.py", "Hare")
    _write_model(tmp_path / "models" / "__pycache__" / "stale.py", "Stale")
    (tmp_path / "models" / "README.md").write_text("# models\n", encoding="utf-8")

    modules = scan_directory(tmp_path / "models")

    assert [m.__name__.split("_")[-2] for m in modules] == ["bunny", "hare"]
    assert get_class(modules[1].Hare).get_context(DEFAULT_ZONE, "table") == "Hare"


def test_scan_directory_include_and_exclude(tmp_path: Path):
    _write_model(tmp_path / "bunny_model.py", "Bunny")
    _write_model(tmp_path / "hare_model.py", "Hare")
    _write_model(tmp_path / "test_bunny.py", "TestBunny")

    included = scan_directory(tmp_path, include="model")
    excluded = scan_directory(tmp_path, exclude=["test_"])

    assert [hasattr(m, "Bunny") for m in included] == [True, False]
    assert len(excluded) == 2
    assert all(not hasattr(m, "TestBunny") for m in excluded)

    with pytest.raises(ValueError, match="Cannot specify both"):
        scan_directory(tmp_path, include="model", exclude="test_")


def test_scan_directory_uses_options(tmp_path: Path):
    _write_model(tmp_path / "bunny.py", "Bunny")
    _write_model(tmp_path / "hare.zf", "Hare")

    set_zoneflect_option(["scan_extensions", "scan_exclude"], [["zf", ".py"], ["bunny"]])
    modules = scan_directory(tmp_path)

    assert len(modules) == 1
    assert hasattr(modules[0], "Hare")


def test_scan_directory_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError, match="Specified path not found"):
        scan_directory(tmp_path / "missing")

    file_path = _write_model(tmp_path / "bunny.py", "Bunny")
    with pytest.raises(ValueError, match="got a file"):
        scan_directory(file_path)
