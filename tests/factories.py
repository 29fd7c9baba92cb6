# tests/factories.py

from unittest.mock import Mock


def signup_payload(**overrides):
    payload = {
        "full_name": "Ama Mensah",
        "email": "ama@example.com",
        "password": "secret123",
        "confirm_password": "secret123",
        "phone": "+233200000000",
        "date_of_birth": "1990-04-12",
        "residential_address": "12 Ring Road",
        "city": "Accra",
        "country": "Ghana",
        "postal_code": "GA-100",
        "id_type": "passport",
        "id_number": "P1234567",
        "payment_method": "mobile_money",
        "payment_provider": "MTN",
        "billing_address": "12 Ring Road",
        "security_deposit_agreed": True,
        "terms_accepted": True,
    }
    payload.update(overrides)
    return payload


def mock_signup_client(user_id="new-owner", email="ama@example.com"):
    """Supabase client whose auth.sign_up creates the given identity."""
    client = Mock()
    auth_resp = Mock()
    auth_resp.user = Mock(id=user_id, email=email)
    auth_resp.session = None
    client.auth.sign_up.return_value = auth_resp
    return client


class FakeQuery:
    """
    Minimal PostgREST query builder over in-memory rows. Records every
    filter it is sent and caps responses at max_rows like the real API.
    """

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.filters = []
        self.orders = []
        self.bounds = None
        self.limit_n = None

    def select(self, columns):
        return self

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column, values):
        self.filters.append(("in", column, list(values)))
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def range(self, start, end):
        self.bounds = (start, end)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matches(self, row):
        for op, column, value in self.filters:
            if op == "eq" and row.get(column) != value:
                return False
            if op == "in" and row.get(column) not in value:
                return False
        return True

    def execute(self):
        self.client.sent.append((self.table, list(self.filters)))
        rows = [dict(r) for r in self.client.tables.get(self.table, []) if self._matches(r)]
        for column, desc in reversed(self.orders):
            rows.sort(key=lambda r: str(r.get(column) or ""), reverse=desc)
        if self.bounds:
            rows = rows[self.bounds[0]:self.bounds[1] + 1]
        if self.limit_n:
            rows = rows[:self.limit_n]
        return Mock(data=rows[:self.client.max_rows])


class FakeSupabaseClient:
    def __init__(self, tables=None, max_rows=1000):
        self.tables = tables or {}
        self.max_rows = max_rows
        self.sent = []

    def table(self, name):
        return FakeQuery(self, name)
