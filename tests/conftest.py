"""
Shared fixtures: an in-memory record store with the same contract as
SupabaseStore (generated ids, timestamps, cascade on person delete).
"""
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from kokuhito.database import AnyEq, Eq, In
from kokuhito.errors import NotFoundError


class FakeStore:
    def __init__(self):
        self.tables = {'people': [], 'cases': []}
        self.calls = []
        self._ids = itertools.count(1)
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _now(self):
        self._clock += timedelta(minutes=1)
        return self._clock.isoformat()

    @staticmethod
    def _matches(row, where):
        if where is None:
            return True
        if isinstance(where, Eq):
            return row.get(where.column) == where.value
        if isinstance(where, AnyEq):
            return any(row.get(col) == where.value for col in where.columns)
        if isinstance(where, In):
            return row.get(where.column) in set(where.values)
        raise TypeError(where)

    def select(self, table, where=None, order=None):
        self.calls.append(('select', table))
        rows = [dict(r) for r in self.tables[table] if self._matches(r, where)]
        if order is not None:
            rows.sort(key=lambda r: r[order.column], reverse=not order.ascending)
        return rows

    def insert(self, table, row):
        self.calls.append(('insert', table))
        now = self._now()
        created = {'id': f"{table[0]}{next(self._ids)}", 'created_at': now}
        if table == 'cases':
            created.update({'is_resolved': False, 'updated_at': now})
        created.update(row)
        self.tables[table].append(created)
        return dict(created)

    def _find(self, table, row_id):
        for r in self.tables[table]:
            if r['id'] == row_id:
                return r
        raise NotFoundError(table, row_id)

    def update(self, table, row_id, fields):
        self.calls.append(('update', table))
        row = self._find(table, row_id)
        row.update(fields)
        if table == 'cases':
            row['updated_at'] = self._now()

    def delete(self, table, row_id):
        self.calls.append(('delete', table))
        row = self._find(table, row_id)
        self.tables[table].remove(row)
        if table == 'people':
            self.tables['cases'] = [
                c for c in self.tables['cases']
                if row_id not in (c['requester_id'], c['related_person_id'])
            ]


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def ana_beto(store):
    """Store with Ana and Beto; returns their ids"""
    ana = store.insert('people', {'name': 'Ana'})['id']
    beto = store.insert('people', {'name': 'Beto'})['id']
    store.calls.clear()
    return ana, beto
