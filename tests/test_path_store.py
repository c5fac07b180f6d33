"""Tests for copy-on-write path mutations."""

from __future__ import annotations

from copy import deepcopy

import pytest

from resume_builder.errors import PathError
from resume_builder.path_store import (
    format_path,
    get_in,
    insert,
    move,
    parse_path,
    remove_at,
    set_in,
)


@pytest.fixture
def tree() -> dict:
    return {
        "personal_info": {"full_name": "", "email": ""},
        "experience": [
            {"id": "a", "job_title": "A", "end_date": "2020-01", "current": False},
            {"id": "b", "job_title": "B", "end_date": "", "current": False},
            {"id": "c", "job_title": "C", "end_date": "", "current": False},
        ],
        "education": [{"id": "e", "end_year": "2019", "current": False}],
        "additional_info": "",
    }


class TestParsePath:
    def test_dotted_string_with_indices(self):
        assert parse_path("experience.0.current") == ("experience", 0, "current")

    def test_sequence_passthrough(self):
        assert parse_path(["skills", 2, "name"]) == ("skills", 2, "name")

    def test_digit_strings_in_sequence_become_indices(self):
        assert parse_path(["skills", "2"]) == ("skills", 2)

    def test_empty_string_is_root(self):
        assert parse_path("") == ()

    def test_rejects_bool_segment(self):
        with pytest.raises(PathError):
            parse_path(["experience", True])

    def test_format_path(self):
        assert format_path(("experience", 1, "company")) == "experience.1.company"


class TestGetIn:
    def test_nested_value(self, tree):
        assert get_in(tree, "experience.1.job_title") == "B"

    def test_missing_returns_default(self, tree):
        assert get_in(tree, "public_links.github") is None
        assert get_in(tree, "experience.9.job_title", "x") == "x"

    def test_type_mismatch_returns_default(self, tree):
        assert get_in(tree, "experience.job_title") is None
        assert get_in(tree, "personal_info.0") is None


class TestSetIn:
    def test_get_after_set_returns_value(self, tree):
        for path, value in [
            ("personal_info.full_name", "Ada Lovelace"),
            ("experience.2.job_title", "Lead"),
            ("additional_info", "Line one\nLine two"),
            (("education", 0, "cgpa"), "3.9"),
        ]:
            assert get_in(set_in(tree, path, value), path) == value

    def test_does_not_mutate_input(self, tree):
        before = deepcopy(tree)
        set_in(tree, "experience.0.job_title", "Changed")
        set_in(tree, "public_links.github", "github.com/ada")
        assert tree == before

    def test_result_shares_no_containers_with_input(self, tree):
        new_tree = set_in(tree, "personal_info.email", "ada@example.com")
        new_tree["experience"][0]["job_title"] = "Mutated later"
        assert tree["experience"][0]["job_title"] == "A"

    def test_creates_absent_intermediate_objects(self, tree):
        new_tree = set_in(tree, "public_links.github", "github.com/ada")
        assert new_tree["public_links"] == {"github": "github.com/ada"}

    def test_stored_value_is_copied(self, tree):
        value = {"name": "Python"}
        new_tree = set_in(tree, "skills", [value])
        value["name"] = "Changed"
        assert new_tree["skills"][0]["name"] == "Python"

    def test_index_equal_to_length_appends(self, tree):
        new_tree = set_in(tree, "experience.3", {"id": "d"})
        assert [e["id"] for e in new_tree["experience"]] == ["a", "b", "c", "d"]

    def test_index_past_end_raises(self, tree):
        with pytest.raises(PathError, match="out of range"):
            set_in(tree, "experience.7.job_title", "x")

    def test_descending_through_scalar_raises(self, tree):
        with pytest.raises(PathError):
            set_in(tree, "additional_info.text", "x")

    def test_root_cannot_be_set(self, tree):
        with pytest.raises(PathError):
            set_in(tree, "", {})

    def test_current_true_clears_end_date(self, tree):
        new_tree = set_in(tree, "experience.0.current", True)
        assert new_tree["experience"][0]["current"] is True
        assert new_tree["experience"][0]["end_date"] == ""

    def test_current_true_clears_end_year(self, tree):
        new_tree = set_in(tree, "education.0.current", True)
        assert new_tree["education"][0]["end_year"] == ""

    def test_current_false_keeps_end_date(self, tree):
        new_tree = set_in(tree, "experience.0.current", False)
        assert new_tree["experience"][0]["end_date"] == "2020-01"


class TestInsert:
    def test_appends_by_default(self, tree):
        new_tree = insert(tree, "experience", {"id": "d"})
        assert new_tree["experience"][-1] == {"id": "d"}
        assert len(tree["experience"]) == 3

    def test_inserts_at_index(self, tree):
        new_tree = insert(tree, "experience", {"id": "d"}, index=1)
        assert [e["id"] for e in new_tree["experience"]] == ["a", "d", "b", "c"]

    def test_index_is_clamped(self, tree):
        new_tree = insert(tree, "experience", {"id": "d"}, index=99)
        assert new_tree["experience"][-1]["id"] == "d"

    def test_creates_missing_list(self, tree):
        new_tree = insert(tree, "hobbies", {"id": "h"})
        assert new_tree["hobbies"] == [{"id": "h"}]

    def test_non_list_target_is_noop(self, tree):
        assert insert(tree, "personal_info", {"id": "x"}) is tree


class TestRemoveAt:
    def test_removes_element(self, tree):
        new_tree = remove_at(tree, "experience", 1)
        assert [e["id"] for e in new_tree["experience"]] == ["a", "c"]
        assert len(tree["experience"]) == 3

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_out_of_range_returns_input(self, tree, index):
        assert remove_at(tree, "experience", index) is tree

    def test_non_list_returns_input(self, tree):
        assert remove_at(tree, "personal_info", 0) is tree
        assert remove_at(tree, "nothing.here", 0) is tree

    def test_remove_then_insert_restores_list(self, tree):
        item = tree["experience"][1]
        restored = insert(remove_at(tree, "experience", 1), "experience", item, index=1)
        assert restored["experience"] == tree["experience"]


class TestMove:
    def test_moves_element(self, tree):
        new_tree = move(tree, "experience", 0, 2)
        assert [e["id"] for e in new_tree["experience"]] == ["b", "c", "a"]

    @pytest.mark.parametrize("i,j", [(0, 2), (2, 0), (0, 1), (1, 2)])
    def test_move_back_restores_order(self, tree, i, j):
        restored = move(move(tree, "experience", i, j), "experience", j, i)
        assert restored["experience"] == tree["experience"]

    @pytest.mark.parametrize("i,j", [(0, 3), (-1, 0), (5, 1)])
    def test_out_of_range_returns_input(self, tree, i, j):
        assert move(tree, "experience", i, j) is tree

    def test_same_index_returns_input(self, tree):
        assert move(tree, "experience", 1, 1) is tree

    def test_non_list_returns_input(self, tree):
        assert move(tree, "additional_info", 0, 1) is tree
