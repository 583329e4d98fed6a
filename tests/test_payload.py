"""Tests for Action, Payload, and as_payload validation."""

import pytest

from miniflux import Action, InvalidPayloadError, Payload, as_payload


class TestAction:
    def test_name_and_fields(self):
        a = Action("ADD_TODO", title="milk", qty=2)
        assert a.name == "ADD_TODO"
        assert a.title == "milk"
        assert a["qty"] == 2
        assert a["action"] == "ADD_TODO"
        assert dict(a) == {"action": "ADD_TODO", "title": "milk", "qty": 2}
        assert len(a) == 3

    def test_missing_field(self):
        a = Action("PING")
        with pytest.raises(AttributeError):
            a.title
        with pytest.raises(KeyError):
            a["title"]
        assert a.get("title") is None
        assert "title" not in a

    def test_immutable(self):
        a = Action("ADD_TODO", title="milk")
        with pytest.raises(AttributeError):
            a.title = "eggs"
        with pytest.raises(AttributeError):
            del a.title
        with pytest.raises(TypeError):
            a.fields["title"] = "eggs"

    def test_reserved_field(self):
        with pytest.raises(TypeError, match="reserved"):
            Action("ADD_TODO", **{"action": "OTHER"})

    def test_from_mapping(self):
        a = Action.from_mapping({"action": "ADD_TODO", "title": "milk"})
        assert a == Action("ADD_TODO", title="milk")

    def test_fields_named_like_parameters(self):
        a = Action.from_mapping({"action": "ADD_USER", "name": "bob"})
        assert a.name == "ADD_USER"
        assert a["name"] == "bob"
        assert Action("ADD_USER", name="bob") == a

    def test_from_mapping_copies(self):
        data = {"action": "ADD_TODO", "title": "milk"}
        a = Action.from_mapping(data)
        data["title"] = "eggs"
        assert a.title == "milk"

    def test_equality(self):
        assert Action("A", x=1) == Action("A", x=1)
        assert Action("A", x=1) != Action("A", x=2)
        assert Action("A") != Action("B")

    def test_repr(self):
        assert repr(Action("PING")) == "Action('PING')"
        assert repr(Action("ADD", title="x")) == "Action('ADD', title='x')"


class TestPayload:
    def test_of(self):
        p = Payload.of("VIEW", "ADD_TODO", title="milk")
        assert p.source == "VIEW"
        assert p.action == Action("ADD_TODO", title="milk")

    def test_of_fields_named_like_parameters(self):
        p = Payload.of("VIEW", "ADD_USER", source="form", name="bob")
        assert p.source == "VIEW"
        assert dict(p.action) == {"action": "ADD_USER", "source": "form", "name": "bob"}

    def test_frozen(self):
        p = Payload.of("VIEW", "PING")
        with pytest.raises(AttributeError):
            p.source = "SERVER"


class TestAsPayload:
    def test_payload_passes_through(self):
        p = Payload.of("VIEW", "PING")
        assert as_payload(p) is p

    def test_from_dict(self):
        p = as_payload({"source": "SERVER", "action": {"action": "LOAD", "items": [1]}})
        assert p == Payload.of("SERVER", "LOAD", items=[1])

    def test_dict_with_action_body(self):
        body = Action("PING")
        p = as_payload({"source": "VIEW", "action": body})
        assert p.action is body

    def test_from_attributes(self):
        class Message:
            source = "VIEW"
            action = {"action": "PING"}

        assert as_payload(Message()) == Payload.of("VIEW", "PING")

    @pytest.mark.parametrize(
        "raw, match",
        [
            ({"action": {"action": "PING"}}, "`source`"),
            ({"source": None, "action": {"action": "PING"}}, "`source`"),
            ({"source": "VIEW"}, "`action` attribute"),
            ({"source": "VIEW", "action": {}}, "`action` attribute"),
            ({"source": "VIEW", "action": "PING"}, "must be a mapping"),
            ({"source": "VIEW", "action": {"title": "x"}}, "`action` name"),
            ({"source": "VIEW", "action": {"action": 3}}, "`action` name"),
            (Payload("VIEW", Action("")), "`action` name"),
            ({"source": "VIEW", "action": {"action": "PING", 1: "x"}}, "keys must be strings"),
        ],
    )
    def test_invalid(self, raw, match):
        with pytest.raises(InvalidPayloadError, match=match):
            as_payload(raw)

    def test_invalid_payload_is_value_error(self):
        with pytest.raises(ValueError):
            as_payload({})
