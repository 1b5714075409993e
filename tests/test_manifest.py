"""Tests for reading and writing manifest versions."""

import json

import pytest
from semantic_version import Version

from versioning.manifest import (
    ManifestError,
    apply_version,
    detect_indent,
    read_version_record,
    read_version_records,
)
from versioning.models import FileVersionRecord


def write_json(path, data, indent):
    path.write_text(json.dumps(data, indent=indent), encoding="utf-8")
    return str(path)


class TestDetectIndent:
    """Indentation detection."""

    def test_tabs(self):
        assert detect_indent(json.dumps({"a": {"b": 1}}, indent="\t")) == "\t"

    def test_two_spaces_nested(self):
        assert detect_indent(json.dumps({"a": {"b": [1, 2]}, "c": 3}, indent="  ")) == "  "

    def test_four_spaces(self):
        assert detect_indent(json.dumps({"a": 1, "b": 2}, indent=4)) == "    "

    def test_compact(self):
        assert detect_indent('{"version":"1.0.0"}') == ""


class TestReadVersionRecord:
    """Reading the declared version of a manifest."""

    def test_reads_tab_indented_file(self, tmp_path):
        path = write_json(tmp_path / "basic.json", {"version": "1.0.0"}, "\t")
        record = read_version_record(path)
        assert record == FileVersionRecord(path=path, version=Version("1.0.0"), indent="\t")

    def test_reads_space_indented_file(self, tmp_path):
        path = write_json(tmp_path / "spaces.json", {"name": "pkg", "version": "1.2.3"}, "  ")
        record = read_version_record(path)
        assert record.version == Version("1.2.3")
        assert record.indent == "  "

    def test_accepts_v_prefixed_version(self, tmp_path):
        path = write_json(tmp_path / "v.json", {"version": "v2.0.0"}, 2)
        assert read_version_record(path).version == Version("2.0.0")

    def test_empty_file_is_absent(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("", encoding="utf-8")
        assert read_version_record(str(path)) is None

    def test_invalid_version_is_absent(self, tmp_path):
        path = write_json(tmp_path / "invalid.json", {"version": "invalid"}, None)
        assert read_version_record(path) is None

    def test_missing_version_key_is_absent(self, tmp_path):
        path = write_json(tmp_path / "nokey.json", {"name": "pkg"}, 2)
        assert read_version_record(path) is None

    def test_non_json_is_absent(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{ version: 1.0.0", encoding="utf-8")
        assert read_version_record(str(path)) is None

    def test_non_object_is_absent(self, tmp_path):
        path = write_json(tmp_path / "list.json", ["1.0.0"], 2)
        assert read_version_record(path) is None

    def test_missing_file_is_absent(self, tmp_path):
        assert read_version_record(str(tmp_path / "nope.json")) is None

    def test_read_many_drops_absent_files(self, tmp_path):
        good = write_json(tmp_path / "a.json", {"version": "1.0.0"}, 2)
        bad = str(tmp_path / "missing.json")
        other = write_json(tmp_path / "b.json", {"version": "1.1.0"}, 2)
        result = read_version_records([good, bad, other])
        assert [r.path for r in result] == [good, other]


class TestApplyVersion:
    """Writing a resolved version back."""

    def test_updates_and_keeps_two_space_indent(self, tmp_path):
        data = {"name": "pkg", "version": "1.0.0", "scripts": {"test": "vitest"}, "private": True}
        path = write_json(tmp_path / "package.json", data, "  ")
        record = read_version_record(path)

        assert apply_version(Version("2.0.0"), record) is True

        expected = dict(data, version="2.0.0")
        assert (tmp_path / "package.json").read_text(encoding="utf-8") == json.dumps(expected, indent="  ")

    def test_tab_indent_roundtrip(self, tmp_path):
        path = write_json(tmp_path / "temp.json", {"version": "1.0.0"}, "\t")
        record = read_version_record(path)
        apply_version(Version("2.0.0"), record)
        content = (tmp_path / "temp.json").read_text(encoding="utf-8")
        assert json.loads(content)["version"] == "2.0.0"
        assert '\n\t"version"' in content

    def test_same_version_is_not_rewritten(self, tmp_path):
        path = tmp_path / "temp.json"
        original = '{\n\t"version": "3.2.1",\n\t"keep":   "spacing"\n}'
        path.write_text(original, encoding="utf-8")
        record = read_version_record(str(path))

        assert apply_version(Version("3.2.1"), record) is False
        assert path.read_text(encoding="utf-8") == original

    def test_rereads_file_before_writing(self, tmp_path):
        path = write_json(tmp_path / "m.json", {"version": "1.0.0"}, 2)
        record = read_version_record(path)
        write_json(tmp_path / "m.json", {"version": "1.0.0", "added": "later"}, 2)

        apply_version(Version("1.0.1"), record)

        assert json.loads((tmp_path / "m.json").read_text(encoding="utf-8")) == {
            "version": "1.0.1",
            "added": "later",
        }

    def test_trailing_newline_kept(self, tmp_path):
        path = tmp_path / "nl.json"
        path.write_text('{\n  "version": "1.0.0"\n}\n', encoding="utf-8")
        apply_version(Version("1.0.1"), read_version_record(str(path)))
        assert path.read_text(encoding="utf-8") == '{\n  "version": "1.0.1"\n}\n'

    def test_compact_file_stays_compact(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text('{"version":"1.0.0","name":"x"}', encoding="utf-8")
        apply_version(Version("1.1.0"), read_version_record(str(path)))
        assert path.read_text(encoding="utf-8") == '{"version":"1.1.0","name":"x"}'

    def test_missing_file_raises(self, tmp_path):
        record = FileVersionRecord(path=str(tmp_path / "gone.json"), version=Version("1.0.0"), indent="  ")
        with pytest.raises(OSError):
            apply_version(Version("1.0.1"), record)

    def test_file_no_longer_an_object_raises(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"version": "1.0.0"}', encoding="utf-8")
        record = read_version_record(str(path))
        path.write_text('["1.0.0"]', encoding="utf-8")
        with pytest.raises(ManifestError):
            apply_version(Version("1.0.1"), record)
        assert path.read_text(encoding="utf-8") == '["1.0.0"]'

    def test_undecodable_file_raises(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"version": "1.0.0"}', encoding="utf-8")
        record = read_version_record(str(path))
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(ManifestError):
            apply_version(Version("1.0.1"), record)
