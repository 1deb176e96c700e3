"""In-memory stand-in for the parts of supabase.Client the services touch.

Covers table() query chains (select/insert/update/delete with eq, is_,
order, limit), auth (sign_up, sign_in_with_password, get_user,
reset_password_for_email, admin.sign_out) and storage buckets. insert, update
and delete return the affected rows, like PostgREST with
return=representation.
"""

import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace


class FakeAPIError(Exception):
    pass


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_to = None

    def select(self, columns="*"):
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def is_(self, column, value):
        if value != "null":
            raise ValueError("fake only supports is_(column, 'null')")
        self.filters.append(lambda row: row.get(column) is None)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, size):
        self.limit_to = size
        return self

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def _project(self, row):
        if self.columns.strip() == "*":
            return dict(row)
        return {c.strip(): row.get(c.strip()) for c in self.columns.split(",")}

    def execute(self):
        self.client.calls.append((self.table, self.op))
        error = self.client.pop_failure(self.table, self.op)
        if error is not None:
            raise error

        rows = self.client.tables.setdefault(self.table, [])
        if self.op == "insert":
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for payload in payloads:
                stamp = self.client.next_timestamp()
                row = {"id": str(uuid.uuid4()), "created_at": stamp, "updated_at": stamp, **payload}
                rows.append(row)
                inserted.append(dict(row))
            return SimpleNamespace(data=inserted, count=None)

        matched = [row for row in rows if self._matches(row)]
        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched], count=None)
        if self.op == "delete":
            for row in matched:
                rows.remove(row)
            return SimpleNamespace(data=[dict(row) for row in matched], count=None)

        if self.order_by:
            column, desc = self.order_by
            present = sorted((r for r in matched if r.get(column) is not None),
                             key=lambda r: r[column], reverse=desc)
            missing = [r for r in matched if r.get(column) is None]
            matched = present + missing
        if self.limit_to is not None:
            matched = matched[:self.limit_to]
        return SimpleNamespace(data=[self._project(row) for row in matched], count=None)


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.passwords = {}
        self.tokens = {}
        self.reset_requests = []
        self.session = None
        self.admin = FakeAuthAdmin()

    def add_user(self, email, password="secret123", metadata=None):
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata=metadata or {},
            app_metadata={},
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            updated_at=None,
        )
        self.users[email] = user
        self.passwords[email] = password
        token = f"token-{user.id}"
        self.tokens[token] = user
        return user, token

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.users:
            raise FakeAPIError("User already registered")
        metadata = credentials.get("options", {}).get("data", {})
        user, _ = self.add_user(email, credentials["password"], metadata)
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials):
        email = credentials["email"]
        if self.passwords.get(email) != credentials["password"]:
            raise FakeAPIError("Invalid login credentials")
        user = self.users[email]
        session = SimpleNamespace(
            access_token=f"token-{user.id}",
            refresh_token=f"refresh-{user.id}",
            expires_in=3600,
        )
        self.session = session
        return SimpleNamespace(user=user, session=session)

    def get_user(self, jwt=None):
        user = self.tokens.get(jwt)
        if user is None:
            raise FakeAPIError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def reset_password_for_email(self, email, options=None):
        self.reset_requests.append((email, options or {}))

    def fork(self):
        """Another client's view of the same user directory, with its own session."""
        other = FakeAuth()
        other.users = self.users
        other.passwords = self.passwords
        other.tokens = self.tokens
        other.reset_requests = self.reset_requests
        other.admin = self.admin
        return other


class FakeAuthAdmin:
    def __init__(self):
        self.signed_out = []

    def sign_out(self, jwt, scope="global"):
        self.signed_out.append(jwt)


class FakeBucket:
    def __init__(self, storage, name):
        self.storage = storage
        self.name = name

    @property
    def objects(self):
        return self.storage.buckets.setdefault(self.name, {})

    def upload(self, path, file, file_options=None):
        if self.storage.fail_uploads:
            raise FakeAPIError("storage unavailable")
        options = file_options or {}
        if path in self.objects and options.get("upsert") != "true":
            raise FakeAPIError("The resource already exists")
        self.objects[path] = {"content": file, "options": options}
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"{self.storage.base_url}/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths):
        removed = []
        for path in paths:
            if self.objects.pop(path, None) is not None:
                removed.append({"name": path})
        return removed


class FakeStorage:
    def __init__(self, base_url):
        self.base_url = base_url
        self.buckets = {}
        self.fail_uploads = False

    def from_(self, name):
        return FakeBucket(self, name)


class FakeSupabase:
    def __init__(self, base_url="https://fake.supabase.co"):
        self.tables = {}
        self.calls = []
        self.auth = FakeAuth()
        self.storage = FakeStorage(base_url)
        self.session_clients = []
        self._failures = {}
        self._clock = datetime(2020, 1, 1, tzinfo=timezone.utc)

    def table(self, name):
        return FakeQuery(self, name)

    def session_client(self):
        """Per-request client sharing this one's users and storage."""
        child = FakeSupabase(self.storage.base_url)
        child.auth = self.auth.fork()
        child.tables = self.tables
        child.storage = self.storage
        self.session_clients.append(child)
        return child

    def fail_next(self, table, op, error=None):
        """Make the next `op` on `table` raise."""
        self._failures.setdefault((table, op), []).append(error or FakeAPIError(f"{op} on {table} failed"))

    def pop_failure(self, table, op):
        queue = self._failures.get((table, op))
        if queue:
            return queue.pop(0)
        return None

    def next_timestamp(self):
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def rows(self, table):
        return self.tables.setdefault(table, [])
