# Copyright 2019-2025 SURF, GÉANT.
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import json
from unittest import mock

import pytest
from structlog.testing import capture_logs
from typer.testing import CliRunner

from facetsearch.cli.main import app, parse_filter_chain
from facetsearch.query import FilterChain

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup():
    # Keep log lines out of the JSON printed on stdout
    with mock.patch("facetsearch.cli.main.initialise_logging") as initialise_logging, capture_logs():
        yield initialise_logging


def test_serialize_command(no_logging_setup):
    result = runner.invoke(
        app,
        ["serialize", "-q", '+foo -bar "baz"', "-f", "informationtype=FAQ", "--size", "20", "--page", "2"],
    )

    assert result.exit_code == 0, result.output
    body = json.loads(result.output)
    assert body["query"]["bool"]["must"][0]["query_string"]["query"] == "foo"
    assert body["size"] == 20
    assert body["from"] == 20
    assert body["post_filter"]["bool"]["filter"][0]["nested"]["path"] == "informationtype"
    assert body["aggs"]["informationtype_agg"]["filter"] == {"match_all": {}}
    no_logging_setup.assert_called_once()


def test_serialize_command_with_facets_file(tmp_path):
    facets_file = tmp_path / "facets.yaml"
    facets_file.write_text("- name: subjects\n  field_path: subjects\n")

    result = runner.invoke(app, ["serialize", "--facets-file", str(facets_file), "-f", "subjects=Math"])

    assert result.exit_code == 0, result.output
    body = json.loads(result.output)
    assert list(body["aggs"]) == ["subjects_agg"]
    assert body["post_filter"]["bool"]["must"][-1] == {"terms": {"subjects": ["Math"]}}


def test_serialize_command_with_invalid_facets_file(tmp_path):
    result = runner.invoke(app, ["serialize", "--facets-file", str(tmp_path / "missing.yaml")])

    assert result.exit_code != 0
    assert "Invalid facet configuration" in result.output


def test_serialize_command_with_invalid_filter():
    result = runner.invoke(app, ["serialize", "-f", "no-separator"])

    assert result.exit_code != 0
    assert "Invalid filter" in result.output


def test_tokenize_command():
    result = runner.invoke(app, ["tokenize", "sun-shine -bar"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "must_not_exact": ["bar"],
        "must_exact": [],
        "must_fuzzy": [],
        "should_exact": [],
        "should_fuzzy": ["sun sun~ shine shine~ sun-shine sun-shine~"],
    }


def test_tokenize_command_without_fuzzy():
    result = runner.invoke(app, ["tokenize", "--no-fuzzy", "word"])

    assert json.loads(result.output)["should_fuzzy"] == ["word"]


def test_parse_filter_chain():
    assert parse_filter_chain("kompasscomponent=BEW/targetaudience=Lehrer") == FilterChain(
        facet="kompasscomponent", value="BEW", child=FilterChain(facet="targetaudience", value="Lehrer")
    )
    assert parse_filter_chain("tag=a=b") == FilterChain(facet="tag", value="a=b")
