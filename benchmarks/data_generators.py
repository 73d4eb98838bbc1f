"""
Test data generators for normalization benchmarks.

Creates JSON documents for performance testing:
- Different sizes (small/large)
- Different complexity levels (flat/nested/mixed)
- String-heavy content with escape sequences

Every document stays inside the restricted grammar: unsigned numbers
without exponents and no empty arrays or objects.
"""

import json
import random
import string
from typing import Any

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5
_ESCAPE_PROBABILITY = 0.3

DATA_TYPES = [
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
]


def generate_test_data(data_type: str) -> bytes:
    """Generates an encoded JSON document of the specified type."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]().encode("utf-8")


def _generate_small_object() -> str:
    """Generates a small JSON object (< 1KB) with unsorted keys."""
    data = {
        "name": "Alice Johnson",
        "id": 12345,
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"source": "api", "created": "2024-01-15T10:30:00Z"},
    }
    return json.dumps(data)


def _generate_large_object() -> str:
    """Generates a large JSON object (> 10KB) with many fields."""
    data = {
        "user_id": random.randint(1000000, 9999999),
        "profile": {
            "personal": {
                "last_name": _random_string(12),
                "first_name": _random_string(10),
                "email": f"{_random_string(8)}@{_random_string(6)}.com",
                "address": {
                    "zip": f"{random.randint(10000, 99999)}",
                    "street": f"{random.randint(1, 9999)} {_random_string(8)} St",
                    "city": _random_string(12),
                    "country": "US",
                },
            },
            "preferences": {
                "timezone": random.choice(
                    ["America/New_York", "Europe/London", "Asia/Tokyo"]
                ),
                "language": random.choice(["en", "es", "fr", "de", "zh"]),
                "notifications": {
                    "sms": random.choice([True, False]),
                    "email": random.choice([True, False]),
                    "push": random.choice([True, False]),
                },
            },
        },
        "transactions": [
            {
                "status": random.choice(["completed", "pending", "failed"]),
                "id": f"txn_{i:06d}",
                "amount": round(random.uniform(1.0, 1000.0), 2),
                "currency": random.choice(["USD", "EUR", "GBP", "JPY"]),
                "description": f"Payment for {_random_string(20)}",
            }
            for i in range(50)
        ],
        "activity_log": [
            {
                "user_agent": f"Mozilla/5.0 ({_random_string(20)})",
                "action": random.choice(
                    ["login", "logout", "purchase", "view", "update"]
                ),
                "ip_address": ".".join(
                    str(random.randint(1, 255)) for _ in range(4)
                ),
            }
            for _ in range(30)
        ],
    }
    return json.dumps(data)


def _generate_mixed_array() -> str:
    """Generates a large array with mixed value types."""
    array: list[Any] = []

    for i in range(200):
        choice = random.randint(1, 6)
        if choice == _INT_TYPE:
            array.append(random.randint(0, 1000))
        elif choice == _FLOAT_TYPE:
            array.append(round(random.uniform(0.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            array.append(_random_string(random.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            array.append(random.choice([True, False]))
        elif choice == _NULL_TYPE:
            array.append(None)
        else:
            array.append(
                {
                    "value": _random_string(10),
                    "score": round(random.uniform(0, 100), 2),
                    "index": i,
                }
            )

    return json.dumps(array)


def _generate_nested_structure() -> str:
    """Generates deeply nested JSON structure."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "nested": create_nested_dict(depth - 1),
            "level": depth,
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
            "data": _random_string(15),
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
                        ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\t"]
                    )
                )
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    data = {
        "strings": [create_escaped_string() for _ in range(100)],
        "unicode": [
            f"Unicode: \\u{random.randint(0x0020, 0x007E):04x}"
            for _ in range(50)
        ],
        "mixed_content": {
            f"key_{i}": {
                "path": f"C:\\\\Users\\\\{_random_string(8)}\\\\file_{i}.txt",
                "description": create_escaped_string(),
                "content": 'Content with \\n newlines and \\" quotes',
            }
            for i in range(20)
        },
    }
    return json.dumps(data)


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
