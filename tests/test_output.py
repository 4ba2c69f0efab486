"""Tests for JSONL and table output."""

import json

from gitsim.output import emit, emit_error, _format_value, _auto_columns
from gitsim.topics import get_topic


class TestEmit:

    def test_jsonl_default(self, capsys):
        emit([{'a': 1}, {'a': 2}])
        lines = capsys.readouterr().out.strip().splitlines()
        assert [json.loads(line) for line in lines] == [{'a': 1}, {'a': 2}]

    def test_uses_to_dict(self, capsys):
        emit([get_topic("merge")])
        data = json.loads(capsys.readouterr().out)
        assert data['id'] == "merge"
        assert data['simulated'] is True

    def test_plain_values(self, capsys):
        emit(["text"])
        assert json.loads(capsys.readouterr().out) == {'value': 'text'}

    def test_to_stderr(self, capsys):
        emit([{'a': 1}], err=True)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err) == {'a': 1}

    def test_pretty_table(self, capsys):
        emit([get_topic("merge")], pretty=True, columns=['id', 'category'])
        out = capsys.readouterr().out
        assert "merge" in out
        assert "Branching" in out

    def test_pretty_empty(self, capsys):
        emit([], pretty=True)
        assert "No results found" in capsys.readouterr().out

    def test_emit_error(self, capsys):
        emit_error("Not found", type="not_found", context={'topic': 'x'})
        data = json.loads(capsys.readouterr().err)
        assert data == {'error': 'Not found', 'type': 'not_found', 'context': {'topic': 'x'}}


class TestFormatting:

    def test_format_value(self):
        assert _format_value(None) == ''
        assert _format_value(True) == 'yes'
        assert _format_value(['a', 'b']) == 'a, b'
        assert _format_value({'k': 1}) == '{"k": 1}'
        assert _format_value(3) == '3'

    def test_auto_columns_prefers_known_order(self):
        rows = [{'description': 'd', 'extra': 1, 'name': 'n', 'id': 'i'}]
        assert _auto_columns(rows) == ['id', 'name', 'description', 'extra']
