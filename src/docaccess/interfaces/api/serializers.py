"""JSON shapes for API responses."""

from docaccess.domain.entities import (
    Conflict,
    EffectivePermission,
    PermissionSource,
    ResourceNode,
)
from docaccess.domain.services import AncestorLevel
from docaccess.domain.value_objects import PermissionTemplate


def _id(value) -> str | None:
    return str(value) if value is not None else None


def source_to_dict(s: PermissionSource) -> dict:
    data = {
        "id": str(s.id),
        "resource_id": str(s.resource_id),
        "subject_ref": s.subject_ref,
        "kind": s.kind.value,
        "priority": s.priority,
        "active": s.active,
        "name": s.display_name,
        "permissions": {a.value: v.value for a, v in s.permissions.items()},
    }
    if s.is_inherited:
        data["inherited_from"] = {
            "resource_id": _id(s.origin_resource_id),
            "source_id": _id(s.origin_source_id),
            "kind": s.origin_kind.value if s.origin_kind else None,
            "priority": s.origin_priority,
            "depth": s.depth,
        }
    return data


def effective_to_dict(p: EffectivePermission) -> dict:
    return {
        "action": p.action.value,
        "granted": p.granted,
        "winning_source_id": _id(p.winning_source_id),
        "explanation": p.explanation,
        "has_conflict": p.has_conflict,
        "conflicting_source_ids": [str(i) for i in p.conflicting_source_ids],
        "contributing_sources": [
            {
                "source": source_to_dict(c.source),
                "value": c.value.value,
                "is_winner": c.is_winner,
            }
            for c in p.contributing_sources
        ],
    }


def conflict_to_dict(c: Conflict) -> dict:
    return {
        "id": str(c.id),
        "type": c.type.value,
        "severity": c.severity.value,
        "status": c.status.value,
        "description": c.description,
        "resource_id": str(c.resource_id),
        "affected_subjects": c.affected_subjects,
        "affected_actions": [a.value for a in c.affected_actions],
        "sources": [
            {
                "id": str(s.id),
                "name": s.name,
                "kind": s.kind.value,
                "action": s.action.value,
                "value": s.value.value,
                "resource_id": _id(s.resource_id),
            }
            for s in c.sources
        ],
        "recommendation": c.recommendation,
        "recommended_value": c.recommended_value.value,
        "auto_resolvable": c.auto_resolvable,
        "resolution_reason": c.resolution_reason,
    }


def node_to_dict(n: ResourceNode) -> dict:
    return {
        "id": str(n.id),
        "kind": n.kind.value,
        "name": n.name,
        "parent_id": _id(n.parent_id),
        "children": sorted(str(c) for c in n.children),
    }


def level_to_dict(level: AncestorLevel) -> dict:
    return {
        "depth": level.depth,
        "resource": node_to_dict(level.node),
        "sources": [source_to_dict(s) for s in level.sources],
    }


def template_to_dict(t: PermissionTemplate) -> dict:
    return {
        "name": t.name,
        "description": t.description,
        "permissions": {a.value: v.value for a, v in t.permissions().items()},
    }
