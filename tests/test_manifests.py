import pytest

from tabpfn_provisioner.errors import ManifestError
from tabpfn_provisioner.lib.manifests import Requirement, load_dev_packages, parse_requirements


def test_dev_manifest_has_all_tooling_packages():
    reqs = load_dev_packages()
    names = [r.name for r in reqs]

    assert len(reqs) == 19
    assert names[0] == "pre-commit"
    assert names[-1] == "pytest"
    assert "mkdocstrings[python]" in names
    assert all(r.constraint for r in reqs)


def test_dev_manifest_pins_linters_exactly():
    specs = {r.name: r.spec() for r in load_dev_packages()}

    assert specs["ruff"] == "ruff==0.14.0"
    assert specs["mypy"] == "mypy==1.19.1"
    assert specs["pytest"] == "pytest>=8.4.2"


def test_requirement_pinned():
    assert Requirement.pinned("tabpfn", "6.3.2").spec() == "tabpfn==6.3.2"
    assert Requirement.pinned("tabpfn", None).spec() == "tabpfn"


@pytest.mark.parametrize("entries", [None, {"name": "x"}, [{"constraint": ">=1"}], ["ruff"]])
def test_parse_requirements_rejects_malformed(entries):
    with pytest.raises(ManifestError):
        parse_requirements(entries, source="test.yaml")
