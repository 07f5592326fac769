from __future__ import annotations

from assistant_relay.core import ContentPart, Message, MessageRole
from assistant_relay.core.adapters.utils import flatten_conversation, flatten_message


def test_plain_string_turns_are_prefixed_with_role() -> None:
    messages = [
        Message(role=MessageRole.USER, content="Hello"),
        Message(role=MessageRole.ASSISTANT, content="Hi, how can I help?"),
    ]

    flattened = flatten_conversation("Be kind.", messages)

    assert flattened == "Be kind.\n\nuser: Hello\n\nassistant: Hi, how can I help?"


def test_text_parts_are_joined_with_newlines() -> None:
    message = Message(
        role=MessageRole.USER,
        content=(
            ContentPart(type="text", text="line one"),
            ContentPart(type="tool_result", data={"tool_use_id": "t1"}),
            ContentPart(type="text", text="line two"),
        ),
    )

    assert flatten_message(message) == "user: line one\nline two"


def test_turns_without_text_parts_are_dropped() -> None:
    messages = [
        Message(role=MessageRole.USER, content=(ContentPart(type="image", data={"source": {}}),)),
        Message(role=MessageRole.USER, content="What is in the picture?"),
        Message(role=MessageRole.ASSISTANT, content=()),
    ]

    flattened = flatten_conversation("System", messages)

    assert flattened == "System\n\nuser: What is in the picture?"
    assert "\n\n\n" not in flattened


def test_system_prompt_is_prefix_followed_by_two_newlines() -> None:
    flattened = flatten_conversation("You are terse.", [Message(role=MessageRole.USER, content="Hi")])

    assert flattened.startswith("You are terse.\n\n")


def test_empty_conversation_keeps_system_prompt_prefix() -> None:
    assert flatten_conversation("Only system", []) == "Only system\n\n"


def test_empty_string_content_is_kept() -> None:
    assert flatten_message(Message(role=MessageRole.USER, content="")) == "user: "
