"""
Tests for Go release helpers.
"""

import pytest

from devsetup.errors import FatalStepError
from devsetup.utils.go import go_arch_for, go_archive_name, parse_go_versions, select_version


class TestGoArch:

    def test_supported(self):
        assert go_arch_for("arm64") == "arm64"
        assert go_arch_for("x86_64") == "amd64"

    @pytest.mark.parametrize("machine", ["i386", "aarch64", "ppc64le", ""])
    def test_unsupported(self, machine):
        with pytest.raises(FatalStepError, match=f"Unsupported architecture: {machine}"):
            go_arch_for(machine)


class TestParseGoVersions:

    def test_keeps_stable_only(self):
        releases = [
            {"version": "go1.24rc1"},
            {"version": "go1.23.2"},
            {"version": "go1.23beta1"},
            {"version": "go1.22.8"},
        ]
        assert parse_go_versions(releases) == ["go1.23.2", "go1.22.8"]

    def test_limit(self):
        releases = [{"version": f"go1.{n}.0"} for n in range(30, 10, -1)]
        versions = parse_go_versions(releases)
        assert len(versions) == 10
        assert versions[0] == "go1.30.0"

    def test_preserves_listing_order(self):
        releases = [{"version": "go1.21.0"}, {"version": "go1.23.0"}]
        assert parse_go_versions(releases) == ["go1.21.0", "go1.23.0"]

    def test_malformed_listing(self):
        assert parse_go_versions({"version": "go1.23.2"}) == []
        assert parse_go_versions(["go1.23.2", {"files": []}, {"version": 3}]) == []


class TestSelectVersion:

    VERSIONS = ["go1.23.2", "go1.23.1", "go1.22.8"]

    def test_empty_selects_first(self):
        assert select_version(self.VERSIONS, "") == "go1.23.2"
        assert select_version(self.VERSIONS, None) == "go1.23.2"

    def test_in_range(self):
        assert select_version(self.VERSIONS, "3") == "go1.22.8"
        assert select_version(self.VERSIONS, " 2 ") == "go1.23.1"

    @pytest.mark.parametrize("choice", ["0", "4", "abc", "-1", "2.0", "²", "①", "٣"])
    def test_invalid(self, choice):
        with pytest.raises(FatalStepError, match="Invalid selection."):
            select_version(self.VERSIONS, choice)

    def test_empty_listing_rejects_everything(self):
        with pytest.raises(FatalStepError):
            select_version([], "1")


def test_archive_name():
    assert go_archive_name("go1.23.2", "darwin", "arm64") == "go1.23.2.darwin-arm64.tar.gz"
