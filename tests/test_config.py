"""
Tests for the config file handling and DAVResultParser.from_config
"""

import json

import pytest

from davstat import DAVResultParser
from davstat.config import config_section
from davstat.config import parser_options
from davstat.config import read_config
from davstat.lib import error

CONFIG = {
    "default": {"huge_tree": False},
    "strict": {"inherits": "default", "strict": True},
    "nextcloud": {"inherits": "strict", "text_properties": "comments-count"},
}


class TestConfig:
    def test_config_section_inherits(self):
        section = config_section(CONFIG, "nextcloud")
        assert section["strict"] is True
        assert section["huge_tree"] is False
        assert section["text_properties"] == "comments-count"

    def test_config_section_missing(self):
        assert config_section(CONFIG, "nonexistent") == {}

    def test_parser_options(self):
        options = parser_options(CONFIG, "nextcloud")
        assert options == {
            "huge_tree": False,
            "strict": True,
            "text_properties": ["comments-count"],
        }

    def test_parser_options_ignores_unknown_keys(self):
        assert parser_options({"default": {"color": "red"}}) == {}

    def test_contains_is_an_unknown_key(self, caplog):
        config = dict(CONFIG, all={"contains": ["default", "nextcloud"]})
        assert parser_options(config, "all") == {}
        assert "unknown key contains" in caplog.text

    def test_read_json(self, tmp_path):
        fn = tmp_path / "davstat.json"
        fn.write_text(json.dumps(CONFIG))
        assert read_config(str(fn)) == CONFIG

    def test_read_yaml(self, tmp_path):
        pytest.importorskip("yaml")
        fn = tmp_path / "davstat.yaml"
        fn.write_text("default:\n  strict: true\n")
        assert read_config(str(fn)) == {"default": {"strict": True}}

    def test_read_missing(self, tmp_path):
        assert read_config(str(tmp_path / "nope.json")) == {}

    def test_read_from_environment(self, tmp_path, monkeypatch):
        fn = tmp_path / "davstat.json"
        fn.write_text(json.dumps(CONFIG))
        monkeypatch.setenv("DAVSTAT_CONFIG_FILE", str(fn))
        assert read_config(None) == CONFIG


class TestParserFromConfig:
    def test_from_config(self, tmp_path):
        fn = tmp_path / "davstat.json"
        fn.write_text(json.dumps(CONFIG))
        parser = DAVResultParser.from_config(str(fn), section="nextcloud")
        assert parser.strict
        assert not parser.huge_tree
        assert parser.text_properties == ("displayname", "comments-count")

    def test_from_missing_config(self, tmp_path):
        parser = DAVResultParser.from_config(str(tmp_path / "nope.json"))
        assert not parser.strict
        assert parser.text_properties == ("displayname",)

    def test_parser_roundtrip(self):
        xml = b"""<d:multistatus xmlns:d="DAV:" xmlns:oc="http://owncloud.org/ns">
            <d:response>
                <d:href>/files/x.txt</d:href>
                <d:propstat>
                    <d:prop>
                        <d:getcontentlength>many</d:getcontentlength>
                        <oc:comments-count>12</oc:comments-count>
                    </d:prop>
                    <d:status>HTTP/1.1 200 OK</d:status>
                </d:propstat>
            </d:response>
        </d:multistatus>"""
        lenient = DAVResultParser(text_properties=["comments-count"])
        stat = lenient.stat(xml, "/files/x.txt", details=True)
        assert stat.size == 0
        assert stat.props["comments-count"] == "12"

        with pytest.raises(error.ResponseError):
            DAVResultParser(strict=True).stat(xml, "/files/x.txt")

    def test_parser_search_and_quota(self):
        xml = b"""<d:multistatus xmlns:d="DAV:">
            <d:response>
                <d:href>/files/</d:href>
                <d:propstat>
                    <d:prop>
                        <d:quota-used-bytes>10</d:quota-used-bytes>
                        <d:quota-available-bytes>-1</d:quota-available-bytes>
                    </d:prop>
                    <d:status>HTTP/1.1 200 OK</d:status>
                </d:propstat>
            </d:response>
        </d:multistatus>"""
        parser = DAVResultParser()
        result = parser.parse_xml(xml)
        quota = parser.parse_quota(result)
        assert quota.used == 10
        assert quota.available == "unknown"
        assert parser.translate_disk_space("2048") == 2048
        found = parser.search(xml, "/files")
        assert [r.filename for r in found.results] == ["/files/"]
        assert found.results[0].basename == "files"
