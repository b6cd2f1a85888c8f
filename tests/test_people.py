"""
Person Directory Tests
======================

Tests for loading people, case counts, name search, sorting and the
person mutations (create, rename, delete with cascade).
"""

import pytest

from kokuhito.cases import CaseView
from kokuhito.constants import SORT_LEAST_CASES, SORT_MOST_CASES, SORT_NAME
from kokuhito.errors import NotFoundError, StoreError, ValidationError
from kokuhito.models import Case, Person
from kokuhito.people import (
    case_count_label, create_person, delete_person, deletion_warning, filter_by_name,
    load_all, rename_person, sort_by, with_case_counts
)


def make_case(cid, requester, related, resolved=False):
    return Case(id=cid, requester_id=requester, related_person_id=related, is_resolved=resolved)


# =============================================================================
# Loading
# =============================================================================

class TestLoadAll:
    """Tests for load_all"""

    def test_sorted_by_name(self, store):
        """Should return people ordered by name, ignoring case and accents"""
        for name in ["beto", "Álvaro", "Carla", "ana"]:
            store.insert('people', {'name': name})

        names = [p.name for p in load_all(store)]
        assert names == ["Álvaro", "ana", "beto", "Carla"]

    def test_store_failure_propagates(self, store):
        """Should raise StoreError when the fetch fails"""
        def boom(*args, **kwargs):
            raise StoreError("offline", table='people')
        store.select = boom

        with pytest.raises(StoreError, match="offline"):
            load_all(store)


# =============================================================================
# Case counts
# =============================================================================

class TestWithCaseCounts:
    """Tests for with_case_counts"""

    def test_counts_match_definition(self):
        """case_count equals the number of cases touching the person"""
        people = [Person(id=pid, name=pid) for pid in ["a", "b", "c", "d"]]
        cases = [
            make_case("1", "a", "b"),
            make_case("2", "a", "c"),
            make_case("3", "b", "a"),
            make_case("4", "c", "c"),
            make_case("5", "x", "a"),
        ]

        counted = with_case_counts(people, cases)

        for p in counted:
            expected = len([c for c in cases if c.requester_id == p.id or c.related_person_id == p.id])
            assert p.case_count == expected
        assert [p.case_count for p in counted] == [4, 2, 2, 0]

    def test_does_not_mutate_input(self):
        """Input people keep their initial count"""
        people = [Person(id="a", name="Ana")]
        with_case_counts(people, [make_case("1", "a", "a")])
        assert people[0].case_count == 0

    def test_ana_beto_tie_is_stable(self, store, ana_beto):
        """One case between Ana and Beto: both count 1 and keep input order"""
        ana, beto = ana_beto
        CaseView(store).create(requester_id=ana, related_person_id=beto)

        people = with_case_counts(load_all(store), CaseView(store).fetch_cases())

        assert [(p.name, p.case_count) for p in people] == [("Ana", 1), ("Beto", 1)]
        assert [p.name for p in sort_by(people, SORT_MOST_CASES)] == ["Ana", "Beto"]


# =============================================================================
# Search and sort
# =============================================================================

class TestFilterAndSort:
    """Tests for filter_by_name and sort_by"""

    def test_filter_case_insensitive_substring(self):
        """Should match substrings regardless of case"""
        people = [Person(id="1", name="Ana Silva"), Person(id="2", name="Beto")]
        assert filter_by_name(people, "ana") == [people[0]]
        assert filter_by_name(people, "SILV") == [people[0]]
        assert filter_by_name(people, "et") == [people[1]]

    def test_filter_empty_query_returns_all(self):
        """Empty or blank query returns every person"""
        people = [Person(id="1", name="Ana"), Person(id="2", name="Beto")]
        assert filter_by_name(people, "") == people
        assert filter_by_name(people, "   ") == people
        assert filter_by_name(people, None) == people

    def test_sort_by_count(self):
        """Should sort by case count in both directions, ties stable"""
        people = [
            Person(id="1", name="A", case_count=1),
            Person(id="2", name="B", case_count=3),
            Person(id="3", name="C", case_count=1),
            Person(id="4", name="D", case_count=0),
        ]
        assert [p.id for p in sort_by(people, SORT_MOST_CASES)] == ["2", "1", "3", "4"]
        assert [p.id for p in sort_by(people, SORT_LEAST_CASES)] == ["4", "1", "3", "2"]

    def test_sort_by_name_idempotent_and_stable(self):
        """Sorting twice gives the same order; equal names keep input order"""
        people = [
            Person(id="1", name="beto"),
            Person(id="2", name="Ana"),
            Person(id="3", name="Beto"),
            Person(id="4", name="ána"),
        ]
        once = sort_by(people, SORT_NAME)
        assert [p.id for p in once] == ["2", "4", "1", "3"]
        assert sort_by(once, SORT_NAME) == once

    def test_unknown_sort_key(self):
        """Should reject unknown sort keys"""
        with pytest.raises(ValueError):
            sort_by([], "random")


# =============================================================================
# Mutations
# =============================================================================

class TestPersonMutations:
    """Tests for create, rename and delete"""

    def test_create_person(self, store):
        """Should insert a trimmed name and return the new id"""
        pid = create_person(store, "  Carla  ")
        assert [p.name for p in load_all(store)] == ["Carla"]
        assert load_all(store)[0].id == pid

    def test_create_blank_name_makes_no_call(self, store):
        """Blank name fails before touching the store"""
        with pytest.raises(ValidationError):
            create_person(store, "   ")
        assert store.calls == []

    def test_rename_person(self, store, ana_beto):
        """Should update the stored name"""
        ana, _ = ana_beto
        rename_person(store, ana, "Ana Paula")
        assert [p.name for p in load_all(store)] == ["Ana Paula", "Beto"]

    def test_rename_missing_person(self, store):
        """Should raise NotFoundError for an unknown id"""
        with pytest.raises(NotFoundError):
            rename_person(store, "nope", "X")

    def test_delete_person_cascades(self, store, ana_beto):
        """Person X with 2 cases: deleting X removes both cases"""
        ana, beto = ana_beto
        carla = create_person(store, "Carla")
        view = CaseView(store)
        view.create(requester_id=ana, related_person_id=beto)
        view.create(requester_id=beto, related_person_id=ana)
        kept = view.create(requester_id=beto, related_person_id=carla)

        delete_person(store, ana)

        assert [r.id for r in view.fetch_all()] == [kept]
        assert [p.name for p in load_all(store)] == ["Beto", "Carla"]


class TestDeletionWarning:
    """Tests for the delete confirmation text"""

    def test_warns_about_cascade(self):
        """Should mention the cases that will be removed"""
        text = deletion_warning(Person(id="1", name="Ana", case_count=2))
        assert "2 casos relacionados" in text
        assert "excluirá os casos" in text

    def test_plain_warning_without_cases(self):
        """Should only say the action is irreversible"""
        assert deletion_warning(Person(id="1", name="Ana")) == "Isso não pode ser desfeito! 🗑️"

    def test_case_count_label(self):
        assert case_count_label(1) == "1 caso"
        assert case_count_label(0) == "0 casos"
