# =============================================================================
# core/services/query.py - Advanced Results (filter/select/sort/paginate)
# =============================================================================
# One helper shared by every list endpoint. Given raw query parameters it:
# 1. Drops the reserved keys (select, sort, page, limit)
# 2. Rewrites field[gt|gte|lt|lte|in]=value into MongoDB operators
# 3. Applies field selection, sort (default newest first) and pagination
# 4. Populates referenced documents
#
# Example:
#   GET /bootcamps?averageCost[lte]=10000&careers[in]=Business,UI/UX&select=name&sort=-averageCost&page=2
#
#   filter:     {"averageCost": {"$lte": 10000.0}, "careers": {"$in": ["Business", "UI/UX"]}}
#   projection: {"name": 1}
#   sort:       [("averageCost", -1), ("_id", -1)]
# =============================================================================

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from app.exceptions import ValidationFailedError
from lib.utils import serialize_document, to_object_id

logger = logging.getLogger(__name__)

RESERVED_PARAMS = frozenset({"select", "sort", "page", "limit"})
OPERATORS = frozenset({"gt", "gte", "lt", "lte", "in"})
DEFAULT_SORT = "-createdAt"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
MAX_LIMIT = 100

_OPERATOR_KEY = re.compile(r"^(?P<field>[\w.]+)\[(?P<op>\w+)\]$")

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


@dataclass(frozen=True)
class Populate:
    """
    How to resolve a referenced entity inline.

    Forward reference (course.bootcamp -> bootcamp document):
        Populate("bootcamp", "bootcamps", local_field="bootcamp", fields=("name", "description"))

    Reverse list (bootcamp.courses -> all courses pointing at it):
        Populate("courses", "courses", local_field="_id", foreign_field="bootcamp", many=True)
    """

    name: str
    collection: str
    local_field: str | None = None
    foreign_field: str = "_id"
    fields: tuple[str, ...] = ()
    many: bool = False

    @property
    def source_field(self) -> str:
        return self.local_field or self.name


@dataclass
class QueryPlan:
    """Parsed form of the query string."""

    filter: dict[str, Any] = field(default_factory=dict)
    projection: dict[str, int] | None = None
    sort: list[tuple[str, int]] = field(default_factory=list)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


# =============================================================================
# Parsing
# =============================================================================

def coerce_value(field_name: str, raw: str, field_type: type) -> Any:
    """
    Convert a query string value to the declared field type.

    Raises:
        ValidationFailedError: If the value does not parse
    """
    if field_type is str:
        return raw

    if field_type is bool:
        lowered = raw.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    elif field_type is ObjectId:
        oid = to_object_id(raw)
        if oid is not None:
            return oid
    else:
        try:
            return field_type(raw)
        except (TypeError, ValueError):
            pass

    raise ValidationFailedError(f"Invalid value for {field_name}: {raw}")


def parse_filters(
    params: Mapping[str, str],
    filter_fields: Mapping[str, type],
) -> dict[str, Any]:
    """
    Build a MongoDB filter from query parameters.

    Reserved keys are removed, unknown fields are ignored, and values are
    coerced by the type declared in `filter_fields`.

    Example:
        parse_filters({"averageCost[lte]": "10000", "housing": "true"}, BOOTCAMP_FILTER_FIELDS)
        # {"averageCost": {"$lte": 10000.0}, "housing": True}
    """
    query: dict[str, Any] = {}

    for key, raw in params.items():
        if key in RESERVED_PARAMS:
            continue

        match = _OPERATOR_KEY.match(key)
        field_name, op = (match.group("field"), match.group("op")) if match else (key, None)

        if field_name not in filter_fields:
            logger.debug(f"Ignoring unknown filter field: {key}")
            continue
        if op is not None and op not in OPERATORS:
            logger.debug(f"Ignoring unsupported operator: {key}")
            continue

        field_type = filter_fields[field_name]

        if op is None:
            query[field_name] = coerce_value(field_name, raw, field_type)
            continue

        if op == "in":
            value: Any = [
                coerce_value(field_name, part.strip(), field_type)
                for part in raw.split(",")
                if part.strip()
            ]
        else:
            value = coerce_value(field_name, raw, field_type)

        existing = query.get(field_name)
        if not isinstance(existing, dict):
            existing = {}
        existing[f"${op}"] = value
        query[field_name] = existing

    return query


def parse_select(raw: str | None) -> dict[str, int] | None:
    """'name,description' -> {'name': 1, 'description': 1}"""
    if not raw:
        return None
    fields = [name.strip() for name in raw.split(",") if name.strip()]
    return {name: 1 for name in fields} or None


def parse_sort(raw: str | None) -> list[tuple[str, int]]:
    """
    '-averageCost,name' -> [('averageCost', -1), ('name', 1), ('_id', -1)]

    A trailing _id key keeps pages stable when sort values tie.
    """
    spec: list[tuple[str, int]] = []
    for part in (raw or DEFAULT_SORT).split(","):
        part = part.strip()
        if not part:
            continue
        if part.startswith("-"):
            spec.append((part[1:], DESCENDING))
        else:
            spec.append((part.lstrip("+"), ASCENDING))

    if not spec:
        spec = parse_sort(DEFAULT_SORT)
    if all(name != "_id" for name, _ in spec):
        spec.append(("_id", spec[0][1]))
    return spec


def _parse_positive_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationFailedError(f"{name} must be a positive integer")
    if value < 1:
        raise ValidationFailedError(f"{name} must be a positive integer")
    return value


def build_query_plan(
    params: Mapping[str, str],
    filter_fields: Mapping[str, type],
    base_filter: Mapping[str, Any] | None = None,
) -> QueryPlan:
    """Parse every part of the query string into a QueryPlan."""
    query = parse_filters(params, filter_fields)
    if base_filter:
        query.update(base_filter)

    return QueryPlan(
        filter=query,
        projection=parse_select(params.get("select")),
        sort=parse_sort(params.get("sort")),
        page=_parse_positive_int("page", params.get("page"), DEFAULT_PAGE),
        limit=min(_parse_positive_int("limit", params.get("limit"), DEFAULT_LIMIT), MAX_LIMIT),
    )


# =============================================================================
# Population
# =============================================================================

def populate_documents(
    collection: Collection,
    docs: list[dict[str, Any]],
    populate: Populate,
) -> list[dict[str, Any]]:
    """
    Resolve one reference across a batch of documents with a single query.

    Forward references are replaced by the referenced document (or None);
    reverse references add a list under `populate.name`.
    """
    source = populate.source_field
    keys = {doc[source] for doc in docs if doc.get(source) is not None}
    if not keys:
        return docs

    projection = {name: 1 for name in populate.fields} if populate.fields else None
    if projection is not None and populate.many:
        projection[populate.foreign_field] = 1

    target = collection.database[populate.collection]
    related = target.find({populate.foreign_field: {"$in": list(keys)}}, projection)

    if populate.many:
        grouped: dict[Any, list[dict[str, Any]]] = {}
        for item in related:
            grouped.setdefault(item.get(populate.foreign_field), []).append(item)
        for doc in docs:
            if source in doc:
                doc[populate.name] = grouped.get(doc[source], [])
    else:
        by_key = {item.get(populate.foreign_field): item for item in related}
        for doc in docs:
            if source in doc:
                doc[populate.name] = by_key.get(doc[source])

    return docs


# =============================================================================
# Advanced Query
# =============================================================================

class AdvancedQuery:
    """
    Filter/select/sort/paginate/populate for one collection.

    Parametrized by the collection, the filterable fields (with types) and
    optional populate rules, so every resource shares this implementation.

    Example:
        results = AdvancedQuery(
            db["courses"],
            COURSE_FILTER_FIELDS,
            populate=[Populate("bootcamp", "bootcamps", fields=("name", "description"))],
        ).execute(request.query_params)
    """

    def __init__(
        self,
        collection: Collection,
        filter_fields: Mapping[str, type],
        populate: list[Populate] | None = None,
        hidden_fields: tuple[str, ...] = (),
        base_filter: Mapping[str, Any] | None = None,
    ):
        self.collection = collection
        self.filter_fields = filter_fields
        self.populate = populate or []
        self.hidden_fields = hidden_fields
        self.base_filter = base_filter

    def execute(self, params: Mapping[str, str]) -> dict[str, Any]:
        """
        Run the query and build the response envelope.

        Returns:
            {"success": True, "count": <total matches>, "pagination": {...}, "data": [...]}
        """
        plan = build_query_plan(params, self.filter_fields, self.base_filter)
        rules = self._selected_rules(plan)

        total = self.collection.count_documents(plan.filter)
        cursor = (
            self.collection.find(plan.filter, plan.projection)
            .sort(plan.sort)
            .skip(plan.skip)
            .limit(plan.limit)
        )
        docs = list(cursor)

        for rule in rules:
            docs = populate_documents(self.collection, docs, rule)

        for doc in docs:
            for hidden in self.hidden_fields:
                doc.pop(hidden, None)

        logger.debug(
            f"{self.collection.name}: {len(docs)} of {total} "
            f"(page {plan.page}, limit {plan.limit}, filter {plan.filter})"
        )

        return {
            "success": True,
            "count": total,
            "pagination": build_pagination(plan.page, plan.limit, total),
            "data": serialize_document(docs),
        }

    def _selected_rules(self, plan: QueryPlan) -> list[Populate]:
        """
        Populate rules that survive `select`.

        With a projection only rules named in it are applied, and each one's
        source field is added so the reference can still be resolved.
        """
        if plan.projection is None:
            return list(self.populate)

        rules = [rule for rule in self.populate if rule.name in plan.projection]
        for rule in rules:
            if rule.source_field != "_id":
                plan.projection[rule.source_field] = 1
        return rules


def build_pagination(page: int, limit: int, total: int) -> dict[str, Any]:
    """
    Next/prev page pointers.

    Example:
        build_pagination(2, 10, 25)
        # {"next": {"page": 3, "limit": 10}, "prev": {"page": 1, "limit": 10}}
    """
    pagination: dict[str, Any] = {}
    end_index = page * limit
    if end_index < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if page > 1:
        pagination["prev"] = {"page": page - 1, "limit": limit}
    return pagination
