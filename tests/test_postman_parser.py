import json
from pathlib import Path

from api_docs_hub.parser.postman import Folder, Leaf, PostmanUrl, load_collection

FIXTURES = Path(__file__).parent / "fixtures"


def _load_sample() -> dict:
    return json.loads((FIXTURES / "sample.postman.json").read_text(encoding="utf-8"))


class TestLoadCollection:
    def test_folder_and_leaves(self):
        collection, warnings = load_collection(_load_sample())
        assert warnings == []
        assert len(collection.items) == 1

        folder = collection.items[0]
        assert isinstance(folder, Folder)
        assert folder.name == "Users"
        assert [type(i) for i in folder.items] == [Leaf, Leaf]

    def test_structured_url_and_query(self):
        collection, _ = load_collection(_load_sample())
        list_users = collection.items[0].items[0]
        assert isinstance(list_users.request.url, PostmanUrl)
        assert [q.key for q in list_users.request.query] == ["page", "size"]
        assert list_users.request.raw_url.startswith("{{baseUrl}}")

    def test_body_and_headers(self):
        collection, _ = load_collection(_load_sample())
        create_user = collection.items[0].items[1]
        assert create_user.request.method == "POST"
        assert create_user.request.body.mode == "raw"
        assert create_user.request.header[0]["key"] == "Authorization"

    def test_info_and_variables(self):
        collection, _ = load_collection(_load_sample())
        assert collection.info.name == "User Service"
        assert "getpostman.com" in collection.info.schema_
        assert collection.variable[0].key == "baseUrl"


class TestLenientInput:
    def test_request_wins_over_item(self):
        doc = {"item": [{"name": "Both", "request": {"method": "GET", "url": "/x"}, "item": []}]}
        collection, _ = load_collection(doc)
        assert isinstance(collection.items[0], Leaf)

    def test_item_with_neither_is_skipped(self):
        collection, warnings = load_collection({"item": [{"name": "Empty"}]})
        assert collection.items == []
        assert warnings == ["Skipped item 'Empty': neither a request nor a folder"]

    def test_string_request_defaults_to_get(self):
        collection, _ = load_collection({"item": [{"name": "Short", "request": "https://a.com/x"}]})
        leaf = collection.items[0]
        assert leaf.request.method == "GET"
        assert leaf.request.raw_url == "https://a.com/x"
        assert leaf.request.query is None

    def test_invalid_request_is_skipped_and_siblings_kept(self):
        doc = {
            "item": [
                {"name": "Bad", "request": {"method": "GET", "url": 42.5}},
                {"name": "Good", "request": {"method": "GET", "url": "https://a.com/x"}},
            ]
        }
        collection, warnings = load_collection(doc)
        assert [i.name for i in collection.items] == ["Good"]
        assert warnings[0].startswith("Skipped request 'Bad'")

    def test_string_header_is_accepted(self):
        doc = {
            "item": [
                {
                    "name": "Search",
                    "request": {"method": "GET", "url": "https://a.com/s", "header": "Accept: application/json\n"},
                }
            ]
        }
        collection, warnings = load_collection(doc)
        assert warnings == []
        assert collection.items[0].request.header == "Accept: application/json\n"

    def test_header_without_key_is_accepted(self):
        doc = {"item": [{"name": "Search", "request": {"url": "https://a.com/s", "header": [{"value": "x"}]}}]}
        collection, warnings = load_collection(doc)
        assert warnings == []
        assert isinstance(collection.items[0], Leaf)

    def test_loose_formdata_is_accepted(self):
        body = {"mode": "formdata", "formdata": [{"key": "file", "type": "file", "src": ["/tmp/a.png"]}, {"value": 1}]}
        doc = {"item": [{"name": "Upload", "request": {"method": "POST", "url": "https://a.com/f", "body": body}}]}
        collection, warnings = load_collection(doc)
        assert warnings == []
        assert collection.items[0].request.body.mode == "formdata"

    def test_null_query_key_is_accepted(self):
        url = {
            "raw": "https://a.com/s?=x&q=1",
            "query": [{"key": None, "value": "x"}, {"key": "q", "value": "1"}],
        }
        collection, warnings = load_collection({"item": [{"name": "Search", "request": {"url": url}}]})
        assert warnings == []
        assert [q.key for q in collection.items[0].request.query] == [None, "q"]

    def test_description_object_and_numeric_values(self):
        doc = {
            "info": {"name": 2024, "version": {"major": 2, "minor": 1, "patch": 0}},
            "item": [
                {
                    "name": 7,
                    "description": {"content": "Markdown text", "type": "text/markdown"},
                    "request": {"url": {"raw": "https://a.com", "query": [{"key": "n", "value": 10}, {"key": "f"}]}},
                }
            ],
        }
        collection, warnings = load_collection(doc)
        leaf = collection.items[0]

        assert warnings == []
        assert collection.info.name == "2024"
        assert collection.info.version == "2.1.0"
        assert leaf.name == "7"
        assert leaf.description == "Markdown text"
        assert [(q.key, q.value) for q in leaf.request.query] == [("n", "10"), ("f", None)]

    def test_non_list_items(self):
        collection, warnings = load_collection({"item": [{"name": "F", "item": {"oops": 1}}]})
        assert isinstance(collection.items[0], Folder)
        assert collection.items[0].items == []
        assert warnings == ["Skipped item list that is not a sequence"]

    def test_missing_info(self):
        collection, _ = load_collection({"item": []})
        assert collection.info.name == ""
        assert collection.items == []
