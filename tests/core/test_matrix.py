"""Tests for CapabilityMatrix, its default data and override loading."""

import json
from pathlib import Path

import pytest

from buildpick.core.capabilities import AllOf, BrowserSignature, Capability, Constant, OsSince, Since
from buildpick.core.matrix import CapabilityMatrix, load_matrix, matrix_from_config, rule_from_config
from buildpick.core.matrix_data import DEFAULT_MATRIX, KNOWN_FAMILIES, build_default_matrix
from buildpick.errors import MatrixConfigError


def _sig(name: str, browser: str, os_name: str = "", os_version: str = "") -> BrowserSignature:
    return BrowserSignature(browser_name=name, browser_version=browser, os_name=os_name, os_version=os_version)


class TestDefaultMatrix:
    def test_families(self) -> None:
        assert DEFAULT_MATRIX.families == (
            "Chrome",
            "Chromium",
            "Chrome Headless",
            "Opera",
            "Vivaldi",
            "Mobile Safari",
            "Safari",
            "Edge",
            "Firefox",
        )

    def test_every_family_covers_every_capability(self) -> None:
        for family in DEFAULT_MATRIX.families:
            assert set(DEFAULT_MATRIX.predicates_for(family)) == set(Capability)

    def test_chrome_variants_share_profile(self) -> None:
        chrome = dict(DEFAULT_MATRIX.predicates_for("Chrome"))
        assert dict(DEFAULT_MATRIX.predicates_for("Chromium")) == chrome
        assert dict(DEFAULT_MATRIX.predicates_for("Chrome Headless")) == chrome

    def test_chrome_thresholds(self) -> None:
        chrome = DEFAULT_MATRIX.predicates_for("Chrome")
        assert chrome[Capability.ES2015] == Since((49,))
        assert chrome[Capability.ES2016] == Since((58,))
        assert chrome[Capability.ES2018] == Since((64,))
        assert chrome[Capability.PUSH] == Since((41,))
        assert chrome[Capability.SERVICEWORKER] == Since((45,))
        assert chrome[Capability.MODULES] == Since((64,))

    def test_edge_platform_limits(self) -> None:
        edge = DEFAULT_MATRIX.predicates_for("Edge")
        assert edge[Capability.ES2015] == Since((15, 15063))
        assert edge[Capability.SERVICEWORKER] == Constant(False)
        assert edge[Capability.MODULES] == Constant(False)
        assert edge[Capability.ES2018] == Constant(False)

    def test_firefox_platform_limits(self) -> None:
        firefox = DEFAULT_MATRIX.predicates_for("Firefox")
        assert firefox[Capability.PUSH] == Constant(False)
        assert firefox[Capability.MODULES] == Constant(False)
        assert firefox[Capability.SERVICEWORKER] == Since((44,))

    def test_mobile_safari_gates_on_os(self) -> None:
        mobile = DEFAULT_MATRIX.predicates_for("Mobile Safari")
        assert mobile[Capability.PUSH] == OsSince((9, 2))
        assert mobile[Capability.MODULES] == OsSince((11, 3))
        assert mobile[Capability.SERVICEWORKER] == Since((11, 3))

    def test_safari_push_needs_browser_and_os(self) -> None:
        push = DEFAULT_MATRIX.predicates_for("Safari")[Capability.PUSH]
        assert isinstance(push, AllOf)
        assert push(_sig("Safari", "9.1", "Mac OS", "10.11")) is True
        assert push(_sig("Safari", "9.1", "Mac OS", "10.10.5")) is False
        assert push(_sig("Safari", "8.0", "Mac OS", "10.13")) is False

    def test_vivaldi_minor_thresholds(self) -> None:
        vivaldi = DEFAULT_MATRIX.predicates_for("Vivaldi")
        assert vivaldi[Capability.MODULES](_sig("Vivaldi", "1.14.1077")) is True
        assert vivaldi[Capability.MODULES](_sig("Vivaldi", "1.13")) is False
        assert vivaldi[Capability.PUSH](_sig("Vivaldi", "1.0")) is True

    def test_unknown_and_empty_family(self) -> None:
        assert dict(DEFAULT_MATRIX.predicates_for("Netscape")) == {}
        assert dict(DEFAULT_MATRIX.predicates_for("")) == {}
        assert dict(DEFAULT_MATRIX.predicates_for(None)) == {}

    def test_aliases(self) -> None:
        assert "OPR" in DEFAULT_MATRIX
        assert dict(DEFAULT_MATRIX.predicates_for("OPR")) == dict(DEFAULT_MATRIX.predicates_for("Opera"))
        assert DEFAULT_MATRIX.aliases["HeadlessChrome"] == "Chrome Headless"

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_MATRIX.predicates_for("Chrome")[Capability.PUSH] = Constant(False)  # type: ignore[index]

    def test_build_default_matrix_is_independent_copy(self) -> None:
        matrix = build_default_matrix()
        assert matrix is not DEFAULT_MATRIX
        assert matrix.families == DEFAULT_MATRIX.families
        assert len(matrix) == len(KNOWN_FAMILIES)


class TestCapabilityMatrix:
    def test_with_overrides_replaces_single_capability(self) -> None:
        updated = DEFAULT_MATRIX.with_overrides({"Edge": {Capability.SERVICEWORKER: Since((17,))}})
        assert updated.predicates_for("Edge")[Capability.SERVICEWORKER] == Since((17,))
        assert updated.predicates_for("Edge")[Capability.ES2015] == Since((15, 15063))
        # The original is untouched.
        assert DEFAULT_MATRIX.predicates_for("Edge")[Capability.SERVICEWORKER] == Constant(False)

    def test_with_overrides_adds_family_and_alias(self) -> None:
        updated = DEFAULT_MATRIX.with_overrides(
            {"Samsung Internet": {Capability.ES2015: Since((5,))}},
            {"SamsungBrowser": "Samsung Internet"},
        )
        assert "Samsung Internet" in updated
        assert set(updated.predicates_for("SamsungBrowser")) == {Capability.ES2015}
        assert "Samsung Internet" not in DEFAULT_MATRIX

    def test_alias_to_unknown_family_rejected(self) -> None:
        with pytest.raises(MatrixConfigError, match="unknown family"):
            CapabilityMatrix({}, {"X": "Nowhere"})


class TestRuleFromConfig:
    def test_booleans(self) -> None:
        assert rule_from_config(True) == Constant(True)
        assert rule_from_config(False) == Constant(False)

    def test_version_string(self) -> None:
        assert rule_from_config("10.3") == Since((10, 3))

    def test_integer(self) -> None:
        assert rule_from_config(64) == Since((64,))

    def test_browser_and_os(self) -> None:
        rule = rule_from_config({"browser": "9", "os": "10.11"})
        assert rule == AllOf((Since((9,)), OsSince((10, 11))))

    def test_os_only(self) -> None:
        assert rule_from_config({"os": "11.3"}) == OsSince((11, 3))

    def test_float_rejected(self) -> None:
        with pytest.raises(MatrixConfigError, match="quoted string"):
            rule_from_config(10.10)

    def test_malformed_version_rejected(self) -> None:
        with pytest.raises(MatrixConfigError, match="malformed version"):
            rule_from_config("ten")

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(MatrixConfigError, match="unknown keys"):
            rule_from_config({"browser": "1", "engine": "2"})

    def test_empty_mapping_rejected(self) -> None:
        with pytest.raises(MatrixConfigError):
            rule_from_config({})


class TestMatrixFromConfig:
    def test_standalone(self) -> None:
        matrix = matrix_from_config({"families": {"Lynx": {"es2015": False, "push": "2"}}})
        assert matrix.families == ("Lynx",)
        assert matrix.predicates_for("Lynx")[Capability.PUSH] == Since((2,))

    def test_layered_over_base(self) -> None:
        matrix = matrix_from_config({"families": {"Firefox": {"modules": "60"}}}, base=DEFAULT_MATRIX)
        assert matrix.predicates_for("Firefox")[Capability.MODULES] == Since((60,))
        assert "Chrome" in matrix

    def test_unknown_capability(self) -> None:
        with pytest.raises(MatrixConfigError, match="unknown capability"):
            matrix_from_config({"families": {"Lynx": {"webgpu": True}}})

    def test_unknown_top_level_key(self) -> None:
        with pytest.raises(MatrixConfigError, match="unknown top-level"):
            matrix_from_config({"browsers": {}})

    def test_family_must_be_mapping(self) -> None:
        with pytest.raises(MatrixConfigError):
            matrix_from_config({"families": {"Lynx": ["es2015"]}})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(MatrixConfigError):
            matrix_from_config(["families"])


class TestLoadMatrix:
    def test_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "matrix.yaml"
        f.write_text(
            "families:\n"
            "  Edge:\n"
            "    serviceworker: '17'\n"
            "  Samsung Internet:\n"
            "    es2015: '5'\n"
            "aliases:\n"
            "  SamsungBrowser: Samsung Internet\n"
        )
        matrix = load_matrix(f, base=DEFAULT_MATRIX)
        assert matrix.predicates_for("Edge")[Capability.SERVICEWORKER] == Since((17,))
        assert set(matrix.predicates_for("SamsungBrowser")) == {Capability.ES2015}

    def test_json(self, tmp_path: Path) -> None:
        f = tmp_path / "matrix.json"
        f.write_text(json.dumps({"families": {"Lynx": {"es2015": {"browser": "3"}}}}))
        matrix = load_matrix(f)
        assert matrix.predicates_for("Lynx")[Capability.ES2015] == Since((3,))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(MatrixConfigError, match="cannot read"):
            load_matrix(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "matrix.yaml"
        f.write_text("families: [unclosed\n")
        with pytest.raises(MatrixConfigError, match="YAML parse error"):
            load_matrix(f)

    def test_invalid_json(self, tmp_path: Path) -> None:
        f = tmp_path / "matrix.json"
        f.write_text("{not json")
        with pytest.raises(MatrixConfigError, match="JSON parse error"):
            load_matrix(f)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        f = tmp_path / "matrix.yaml"
        f.write_bytes(b"families:\n  \xff: {}\n")
        with pytest.raises(MatrixConfigError, match="cannot read"):
            load_matrix(f)

    def test_non_ascii_digits_rejected(self) -> None:
        with pytest.raises(MatrixConfigError):
            rule_from_config("\u0663")
