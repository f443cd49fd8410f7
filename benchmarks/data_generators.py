"""
Test data generators for partial parsing benchmarks.

Creates JSON documents of different shapes and cuts them the way a
streaming producer would leave them:
- Complete documents for the decoder fast path
- Truncated documents that exercise the partial parser
- String-heavy content with escape sequences
"""

import json
import random
import string
from typing import Any

_ESCAPE_PROBABILITY = 0.3


def generate_test_data(data_type: str) -> str:
    """Generates a complete JSON document of the specified type."""
    generators = {
        "small_object": _generate_small_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]()


def truncate(doc: str, fraction: float) -> str:
    """Cuts a document after the given fraction of its characters."""
    if not 0 < fraction <= 1:
        raise ValueError("fraction must be in (0, 1]")
    return doc[: int(len(doc) * fraction)]


def _generate_small_object() -> str:
    """Generates a small JSON object (< 1KB) shaped like a chat completion."""
    data = {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1677652288,
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": "Hello! How can I help you today?",
                },
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 9, "completion_tokens": 12},
    }
    return json.dumps(data)


def _generate_mixed_array() -> str:
    """Generates a large array with mixed data types."""
    array: list[Any] = []

    for i in range(200):
        choice = i % 6
        if choice == 0:
            array.append(random.randint(-1000, 1000))
        elif choice == 1:
            array.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == 2:
            array.append(_random_string(random.randint(5, 30)))
        elif choice == 3:
            array.append(random.choice([True, False]))
        elif choice == 4:
            array.append(None)
        else:
            array.append(
                {
                    "index": i,
                    "value": _random_string(10),
                    "score": round(random.uniform(0, 100), 2),
                }
            )

    return json.dumps(array)


def _generate_nested_structure() -> str:
    """Generates deeply nested JSON structure."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "items": [create_nested_dict(depth - 1) for _ in range(2)],
            "nested": create_nested_dict(depth - 1),
        }

    return json.dumps(create_nested_dict(6))


def _generate_string_heavy() -> str:
    """Generates JSON with many string escape sequences."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(
                    random.choice(
                        ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t"]
                    )
                )
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    strings = ", ".join(f'"{create_escaped_string()}"' for _ in range(100))
    return '{"strings": [' + strings + "]}"


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
