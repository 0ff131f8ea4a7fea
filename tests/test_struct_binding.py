"""Tests for junction.binding.structs: URL-encoded and JSON record binding."""

from dataclasses import dataclass, field

import pytest

from junction.app import App
from junction.binding.structs import FieldKind, StructBinder, describe, is_record_type
from junction.errors import BindingError, ConfigurationError
from junction.http.request import Request
from junction.testing import TestClient


@dataclass(frozen=True, slots=True)
class Person:
    Name: str
    Age: int
    Height: float
    Member: bool


@dataclass(frozen=True, slots=True)
class Signup:
    name: str
    age: int = 18
    nickname: str | None = None
    tags_seen: int = field(default=0)
    _secret: str = "hidden"


class TestDescribe:
    def test_field_kinds(self) -> None:
        specs = describe(Person)
        assert [(s.name, s.kind) for s in specs] == [
            ("Name", FieldKind.STR),
            ("Age", FieldKind.INT),
            ("Height", FieldKind.FLOAT),
            ("Member", FieldKind.BOOL),
        ]

    def test_optional_field(self) -> None:
        nickname = next(s for s in describe(Signup) if s.name == "nickname")
        assert nickname.optional
        assert nickname.kind is FieldKind.STR

    def test_is_cached(self) -> None:
        assert describe(Person) is describe(Person)

    def test_underscore_fields_are_not_exported(self) -> None:
        secret = next(s for s in describe(Signup) if s.name == "_secret")
        assert not secret.exported

    def test_rejects_non_dataclass(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a dataclass type"):
            StructBinder(dict)

    def test_rejects_instance(self) -> None:
        assert not is_record_type(Person("a", 1, 1.0, True))

    def test_rejects_nested_types(self) -> None:
        @dataclass
        class Nested:
            tags: list[str]

        with pytest.raises(ConfigurationError, match="unsupported type"):
            StructBinder(Nested)


class TestBindUrlEncoded:
    def test_single_field(self) -> None:
        person = StructBinder(Person).bind(b"Name=Ada")
        assert person == Person(Name="Ada", Age=0, Height=0.0, Member=False)

    def test_all_fields(self) -> None:
        person = StructBinder(Person).bind(b"Name=Ada&Age=36&Height=1.65&Member=true")
        assert person == Person(Name="Ada", Age=36, Height=1.65, Member=True)

    def test_field_names_are_case_sensitive(self) -> None:
        person = StructBinder(Person).bind(b"name=Ada")
        assert person.Name == ""

    def test_defaults_for_absent_fields(self) -> None:
        signup = StructBinder(Signup).bind(b"name=Ada")
        assert signup == Signup(name="Ada", age=18, nickname=None)

    def test_underscore_field_not_bound(self) -> None:
        signup = StructBinder(Signup).bind(b"name=Ada&_secret=leak")
        assert signup._secret == "hidden"

    def test_null_for_optional_field(self) -> None:
        signup = StructBinder(Signup).bind(b"name=Ada&nickname=null")
        # String fields are quoted before decoding, so "null" stays a string
        assert signup.nickname == "null"

    def test_int_accepts_integer_literal(self) -> None:
        assert StructBinder(Person).bind(b"Age=-4").Age == -4

    def test_float_accepts_integer_literal(self) -> None:
        assert StructBinder(Person).bind(b"Height=2").Height == 2.0

    @pytest.mark.parametrize(
        ("body", "message"),
        [
            (b"Age=abc", "abc is invalid for field Age"),
            (b"Age=4.5", "4.5 is invalid for field Age"),
            (b"Age=true", "true is invalid for field Age"),
            (b"Member=yes", "yes is invalid for field Member"),
            (b"Member=1", "1 is invalid for field Member"),
            (b"Height=NaN", "NaN is invalid for field Height"),
            (b"Height=1e400", "1e400 is invalid for field Height"),
            (b"Age=9223372036854775808", "9223372036854775808 is invalid for field Age"),
        ],
    )
    def test_invalid_values(self, body: bytes, message: str) -> None:
        with pytest.raises(BindingError) as exc_info:
            StructBinder(Person).bind(body)
        assert exc_info.value.status == 400
        assert exc_info.value.detail == message

    def test_quote_in_string_field_is_rejected(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            StructBinder(Person).bind(b'Name=say+%22hi%22')
        assert exc_info.value.field == "Name"

    def test_invalid_utf8(self) -> None:
        with pytest.raises(BindingError, match="not valid UTF-8"):
            StructBinder(Person).bind(b"Name=%ff\xff")


class TestBindJson:
    def test_object(self) -> None:
        person = StructBinder(Person).bind_json(
            b'{"Name": "Ada", "Age": 36, "Height": 1.65, "Member": true}'
        )
        assert person == Person(Name="Ada", Age=36, Height=1.65, Member=True)

    def test_unknown_keys_ignored(self) -> None:
        signup = StructBinder(Signup).bind_json(b'{"name": "Ada", "extra": [1, 2]}')
        assert signup.name == "Ada"

    def test_null_for_optional_field(self) -> None:
        signup = StructBinder(Signup).bind_json(b'{"name": "Ada", "nickname": null}')
        assert signup.nickname is None

    def test_null_for_required_field_takes_default(self) -> None:
        signup = StructBinder(Signup).bind_json(b'{"name": "Ada", "age": null}')
        assert signup.age == 18

    def test_nan_literal_is_not_json(self) -> None:
        with pytest.raises(BindingError, match="not valid JSON"):
            StructBinder(Person).bind_json(b'{"Height": NaN}')

    def test_overflowing_float_rejected(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            StructBinder(Person).bind_json(b'{"Height": 1e400}')
        assert exc_info.value.field == "Height"

    def test_int_outside_64_bits_rejected(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            StructBinder(Person).bind_json(b'{"Age": 18446744073709551616}')
        assert exc_info.value.detail == "18446744073709551616 is invalid for field Age"

    def test_wrong_type(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            StructBinder(Person).bind_json(b'{"Age": "36"}')
        assert exc_info.value.detail == '"36" is invalid for field Age'

    def test_bool_is_not_int(self) -> None:
        with pytest.raises(BindingError):
            StructBinder(Person).bind_json(b'{"Age": true}')

    def test_invalid_json(self) -> None:
        with pytest.raises(BindingError, match="not valid JSON"):
            StructBinder(Person).bind_json(b"{not json")

    def test_non_object(self) -> None:
        with pytest.raises(BindingError, match="expected a JSON object, got list"):
            StructBinder(Person).bind_json(b"[1, 2]")


class TestHandleStruct:
    async def test_binds_record(self) -> None:
        app = App()
        seen: list[Person] = []

        def create(request: Request, person: Person) -> str:
            seen.append(person)
            return f"hello {person.Name}"

        app.handle_struct("POST", "/people", Person, create)

        async with TestClient(app) as client:
            response = await client.post("/people", form={"Name": "Ada"})

        assert response.text == "hello Ada"
        assert seen == [Person(Name="Ada", Age=0, Height=0.0, Member=False)]

    async def test_binding_failure_is_400(self) -> None:
        app = App()
        calls: list[Person] = []
        app.handle_struct("POST", "/people", Person, lambda request, p: calls.append(p))

        async with TestClient(app) as client:
            response = await client.post("/people", form={"Age": "old"})

        assert response.status == 400
        assert response.text == "old is invalid for field Age"
        assert calls == []

    def test_bad_target_fails_at_registration(self) -> None:
        app = App()
        with pytest.raises(ConfigurationError):
            app.handle_struct("POST", "/people", str, lambda request, p: None)


class TestHandleJson:
    def _app(self) -> App:
        app = App()

        def create(request: Request, person: Person | None, error: BindingError | None):
            if error is not None:
                return {"error": error.detail}, 422
            return {"name": person.Name, "age": person.Age}, 201

        app.handle_json("POST", "/people", Person, create)
        return app

    async def test_binds_record(self) -> None:
        async with TestClient(self._app()) as client:
            response = await client.post("/people", json={"Name": "Ada", "Age": 36})

        assert response.status == 201
        assert response.text == '{"name": "Ada", "age": 36}'

    async def test_handler_decides_on_error(self) -> None:
        async with TestClient(self._app()) as client:
            response = await client.post("/people", body=b"[]")

        assert response.status == 422
        assert response.text == '{"error": "expected a JSON object, got list"}'
