import json

import pytest

from skytap_publish_url.exceptions import (
    MalformedResponseError,
    PublishSetNotFoundError,
    PublishSetResolutionError,
    UnsupportedPublishSetTypeError,
)
from skytap_publish_url.publish_sets import (
    Found,
    NotFound,
    PublishSetRecord,
    PublishSetType,
    Rejected,
    parse_publish_sets,
    resolve_published_url,
    select_publish_set,
)


def record(name, publish_set_type=PublishSetType.SINGLE_URL, desktops_url="https://x/d"):
    return PublishSetRecord(name=name, publish_set_type=publish_set_type, desktops_url=desktops_url)


class TestParsePublishSets:
    def test_parses_api_example(self):
        body = json.dumps(
            {
                "id": "1453536",
                "publish_sets": [
                    {
                        "desktops_url": "https://cloud.skytap.com/vms/9119366dd7ead4cbb61e3e528215ef3c/desktops",
                        "end_time": None,
                        "id": "511590",
                        "name": "testpublish",
                        "password": None,
                        "publish_set_type": "single_url",
                        "url": "https://cloud.skytap.com/configurations/1453536/publish_sets/511590",
                        "use_smart_client": True,
                        "vms": [{"access": "use", "id": "e24f463d"}],
                    }
                ],
            }
        )

        records = parse_publish_sets(body)

        assert len(records) == 1
        rec = records[0]
        assert rec.name == "testpublish"
        assert rec.publish_set_type is PublishSetType.SINGLE_URL
        assert rec.desktops_url.endswith("/desktops")
        assert rec.id == "511590"
        assert rec.url.endswith("/publish_sets/511590")

    def test_preserves_order(self, publish_sets_body):
        body = publish_sets_body(
            {"name": "b", "publish_set_type": "single_url", "desktops_url": "u1"},
            {"name": "a", "publish_set_type": "multiple_url", "desktops_url": "u2"},
        )

        assert [r.name for r in parse_publish_sets(body)] == ["b", "a"]

    def test_desktops_url_only_for_single_url(self, publish_sets_body):
        body = publish_sets_body(
            {"name": "m", "publish_set_type": "multiple_url", "desktops_url": "https://x/d"}
        )

        rec = parse_publish_sets(body)[0]
        assert rec.publish_set_type is PublishSetType.MULTIPLE_URL
        assert rec.desktops_url is None

    def test_null_desktops_url(self, publish_sets_body):
        body = publish_sets_body({"name": "s", "publish_set_type": "single_url", "desktops_url": None})

        assert parse_publish_sets(body)[0].desktops_url is None

    def test_unknown_type(self, publish_sets_body):
        body = publish_sets_body({"name": "s", "publish_set_type": "per_vm_smart"})

        rec = parse_publish_sets(body)[0]
        assert rec.publish_set_type is PublishSetType.OTHER
        assert rec.raw_type == "per_vm_smart"

    def test_odd_shaped_auxiliary_fields_are_ignored(self, publish_sets_body):
        body = publish_sets_body(
            {
                "name": "main",
                "publish_set_type": "single_url",
                "desktops_url": "https://x/d",
                "id": ["511590"],
                "url": {"href": "https://cloud.skytap.com/publish_sets/511590"},
            }
        )

        records = parse_publish_sets(body)

        assert records[0].id is None
        assert records[0].url is None
        assert select_publish_set(records, "main") == Found("https://x/d")

    def test_empty_list(self, publish_sets_body):
        assert parse_publish_sets(publish_sets_body()) == []

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            "",
            json.dumps([]),
            json.dumps("publish_sets"),
            json.dumps({"id": "1"}),
            json.dumps({"publish_sets": None}),
            json.dumps({"publish_sets": {"name": "x"}}),
            json.dumps({"publish_sets": ["x"]}),
            json.dumps({"publish_sets": [{"publish_set_type": "single_url"}]}),
            json.dumps({"publish_sets": [{"name": "x"}]}),
            json.dumps({"publish_sets": [{"name": 5, "publish_set_type": "single_url"}]}),
            json.dumps({"publish_sets": [{"name": "x", "publish_set_type": "single_url", "desktops_url": ["u"]}]}),
        ],
    )
    def test_malformed(self, body):
        with pytest.raises(MalformedResponseError):
            parse_publish_sets(body)


class TestSelectPublishSet:
    def test_single_url_match(self):
        result = select_publish_set([record("other", desktops_url="u0"), record("main")], "main")
        assert result == Found("https://x/d")

    def test_case_sensitive(self):
        assert select_publish_set([record("Main")], "main") == NotFound("main")

    def test_no_match(self):
        assert isinstance(select_publish_set([record("a"), record("b")], "c"), NotFound)

    def test_empty_records(self):
        assert select_publish_set([], "main") == NotFound("main")

    def test_first_match_wins(self):
        records = [record("main", desktops_url="first"), record("main", desktops_url="second")]
        assert select_publish_set(records, "main") == Found("first")

    def test_multiple_url_rejected(self):
        result = select_publish_set([record("main", PublishSetType.MULTIPLE_URL, None)], "main")

        assert isinstance(result, Rejected)
        assert result.publish_set_type is PublishSetType.MULTIPLE_URL

    def test_multiple_url_not_rescued_by_later_single_url(self):
        records = [
            record("main", PublishSetType.MULTIPLE_URL, None),
            record("main", PublishSetType.SINGLE_URL, "https://x/d"),
        ]
        assert isinstance(select_publish_set(records, "main"), Rejected)

    def test_other_type_keeps_scanning(self):
        records = [
            record("main", PublishSetType.OTHER, None),
            record("main", PublishSetType.SINGLE_URL, "https://x/later"),
        ]
        assert select_publish_set(records, "main") == Found("https://x/later")

    def test_only_other_type_is_not_found(self):
        assert select_publish_set([record("main", PublishSetType.OTHER, None)], "main") == NotFound("main")

    @pytest.mark.parametrize("url", [None, ""])
    def test_single_url_without_url_is_rejected(self, url):
        result = select_publish_set([record("main", desktops_url=url)], "main")

        assert isinstance(result, Rejected)
        assert result.publish_set_type is PublishSetType.SINGLE_URL


class TestResolvePublishedUrl:
    def test_found(self):
        assert resolve_published_url([record("main")], "main") == "https://x/d"

    def test_multiple_url(self):
        with pytest.raises(UnsupportedPublishSetTypeError, match="individual VMs"):
            resolve_published_url([record("main", PublishSetType.MULTIPLE_URL, None)], "main")

    def test_not_found(self):
        with pytest.raises(PublishSetNotFoundError, match="missing"):
            resolve_published_url([record("main")], "missing")

    def test_missing_url(self):
        with pytest.raises(PublishSetResolutionError) as exc_info:
            resolve_published_url([record("main", desktops_url=None)], "main")

        assert not isinstance(exc_info.value, UnsupportedPublishSetTypeError)
