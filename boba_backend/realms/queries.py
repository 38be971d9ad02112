"""
Realm-scoped settings resolution.

A realm stores default settings per page context. User settings override
entries with the same name in every context where the realm defines them;
settings the realm does not know about are attached to the ``root`` context.
"""

from __future__ import annotations

import copy

from boba_backend.db import DbClient

SETTING_CONTEXTS = ("root", "index_page", "board_page", "thread_page")


def get_settings_by_slug(
    db: DbClient, *, realm_slug: str, user_settings: list[dict]
) -> dict[str, list[dict]]:
    stored = db.get_realm_settings(realm_slug) or {}
    settings: dict[str, list[dict]] = {
        context: copy.deepcopy(stored.get(context) or []) for context in SETTING_CONTEXTS
    }

    for user_setting in user_settings or []:
        name = user_setting.get("name")
        if not name:
            continue
        entry = {
            "name": name,
            "type": user_setting.get("type", "STRING"),
            "value": user_setting.get("value"),
        }
        applied = False
        for context_settings in settings.values():
            for index, existing in enumerate(context_settings):
                if existing.get("name") == name:
                    context_settings[index] = dict(entry)
                    applied = True
        if not applied:
            settings["root"].append(entry)
    return settings
