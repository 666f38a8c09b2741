import json
import logging
from typing import Any, Dict

from pydantic import ValidationError

from ghroute.core.exceptions import FormatError
from ghroute.models.base import JsonValue
from ghroute.models.custom_model import CustomModel, FeatureCollection, Op, Statement

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = ("distance_influence", "heading_penalty")
STATEMENT_FIELDS = ("priority", "speed")


class CustomModelCodec:
    """Converts custom models to and from their JSON wire format.

    Statements keep their order in both directions since the routing
    service applies them in sequence.
    """

    @staticmethod
    def statement_to_json(statement: Statement) -> Dict[str, str]:
        return {"if": statement.condition, statement.op.value: statement.value}

    @staticmethod
    def statement_from_json(tree: JsonValue) -> Statement:
        if not isinstance(tree, dict) or "if" not in tree:
            raise FormatError(f"Statement must be an object with an 'if' condition: {tree!r}")
        ops = [op for op in Op if op.value in tree]
        if len(ops) != 1:
            raise FormatError(
                f"Statement needs exactly one of {', '.join(op.value for op in Op)}: {tree!r}"
            )
        op = ops[0]
        try:
            return Statement(condition=tree["if"], op=op, value=tree[op.value])
        except ValidationError as e:
            raise FormatError(f"Invalid statement {tree!r}: {e}") from e

    @classmethod
    def to_json(cls, model: CustomModel) -> Dict[str, Any]:
        tree: Dict[str, Any] = {}
        for name in NULLABLE_FIELDS:
            value = getattr(model, name)
            if value is not None or model.is_set(name):
                tree[name] = value
        if model.areas.features:
            tree["areas"] = model.areas.model_dump(mode="json")
        for name in STATEMENT_FIELDS:
            statements = getattr(model, name)
            if statements:
                tree[name] = [cls.statement_to_json(s) for s in statements]
        return tree

    @classmethod
    def from_json(cls, tree: JsonValue) -> CustomModel:
        if not isinstance(tree, dict):
            raise FormatError(f"Custom model must be a JSON object, got {type(tree).__name__}")

        values: Dict[str, Any] = {}
        for key, value in tree.items():
            if key in NULLABLE_FIELDS:
                values[key] = value
            elif key == "areas":
                try:
                    values[key] = FeatureCollection.model_validate(value)
                except ValidationError as e:
                    raise FormatError(f"Invalid areas in custom model: {e}") from e
            elif key in STATEMENT_FIELDS:
                if not isinstance(value, list):
                    raise FormatError(f"'{key}' must be an array of statements")
                values[key] = [cls.statement_from_json(s) for s in value]
            else:
                logger.warning(f"Ignoring unknown custom model key '{key}'")

        try:
            return CustomModel(**values)
        except ValidationError as e:
            raise FormatError(f"Invalid custom model: {e}") from e

    @classmethod
    def dumps(cls, model: CustomModel) -> str:
        return json.dumps(cls.to_json(model))

    @classmethod
    def loads(cls, text: str) -> CustomModel:
        try:
            tree = json.loads(text)
        except json.JSONDecodeError as e:
            raise FormatError(f"Custom model is not valid JSON: {e}") from e
        return cls.from_json(tree)
