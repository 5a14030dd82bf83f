# dividi/utils/permissions.py
# ПРАВА В ГРУППЕ.
# Владелец - первый участник в group.members (создатель группы).

from __future__ import annotations

from typing import Optional

from dividi.schemas.group import Group


def is_admin_of_group(group: Group, user_id: Optional[str]) -> bool:
    if not user_id or not group.members:
        return False
    return group.members[0].id == user_id


def can_edit_expense(expense_creator_id: Optional[str], group: Group, user_id: Optional[str]) -> bool:
    """Править расход может его автор или владелец группы."""
    if not user_id:
        return False
    if expense_creator_id == user_id:
        return True
    return is_admin_of_group(group, user_id)
