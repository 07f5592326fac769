from __future__ import annotations

import pytest

from assistant_relay.core import ContentPart, Message, MessageRole


def test_from_mapping_accepts_plain_text() -> None:
    message = Message.from_mapping({"role": "User", "content": "hello"})

    assert message.role is MessageRole.USER
    assert message.content == "hello"


def test_from_mapping_builds_content_parts() -> None:
    message = Message.from_mapping(
        {
            "role": "assistant",
            "content": [
                {"type": "text", "text": "first"},
                {"type": "tool_use", "id": "toolu_1", "name": "read_file", "input": {"path": "a"}},
            ],
        }
    )

    assert isinstance(message.content, tuple)
    assert message.content[0] == ContentPart(type="text", text="first")
    assert message.content[1].type == "tool_use"
    assert message.content[1].data["name"] == "read_file"
    assert message.text_parts == ("first",)


def test_from_mapping_rejects_unknown_role() -> None:
    with pytest.raises(ValueError):
        Message.from_mapping({"role": "system", "content": "nope"})


def test_role_strings_are_coerced() -> None:
    message = Message(role="assistant", content="ok")  # type: ignore[arg-type]

    assert message.role is MessageRole.ASSISTANT


def test_content_lists_are_frozen_to_tuples() -> None:
    message = Message(role=MessageRole.USER, content=[ContentPart(type="text", text="a")])  # type: ignore[arg-type]

    assert message.content == (ContentPart(type="text", text="a"),)


def test_content_must_hold_content_parts() -> None:
    with pytest.raises(TypeError):
        Message(role=MessageRole.USER, content=[{"type": "text", "text": "a"}])  # type: ignore[list-item]


def test_text_part_requires_text() -> None:
    with pytest.raises(ValueError):
        ContentPart(type="text")


def test_content_part_data_is_read_only() -> None:
    part = ContentPart(type="image", data={"source": "x"})

    with pytest.raises(TypeError):
        part.data["source"] = "y"  # type: ignore[index]
