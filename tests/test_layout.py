import importlib

CORE_MODULES = [
    "denopak",
    "denopak.checksum",
    "denopak.cli",
    "denopak.emit",
    "denopak.errors",
    "denopak.fetch",
    "denopak.generator",
    "denopak.lockfile",
    "denopak.models",
    "denopak.observability",
    "denopak.policy",
    "denopak.registry",
]


def test_core_package_layout_modules_importable() -> None:
    for module_name in CORE_MODULES:
        module = importlib.import_module(module_name)
        assert module is not None
