"""Seed a store with demo data."""

from __future__ import annotations

import logging

from .base import RecordStore

logger = logging.getLogger(__name__)


async def seed_store(store: RecordStore) -> bool:
    """Seed demo team, events, tasks, content, budget, inventory and meetings.

    Returns False without writing anything when events already exist.
    """
    if await store.list("events"):
        return False

    # --- Team ---
    members = {}
    for name, role, email in [
        ("Ayesha Khan", "President", "ayesha@society.edu"),
        ("Bilal Ahmed", "Events Lead", "bilal@society.edu"),
        ("Sara Malik", "Content Lead", "sara@society.edu"),
        ("Omar Farooq", "Treasurer", "omar@society.edu"),
    ]:
        row = await store.insert("team_members", {"name": name, "role": role, "email": email})
        members[name.split()[0].lower()] = row["id"]

    # --- Events ---
    oweek = await store.insert(
        "events",
        {
            "name": "O-Week 2026",
            "event_type": "O-Week",
            "date_start": "2026-09-01",
            "date_end": "2026-09-05",
            "location": "Main Lawn",
            "status": "active",
            "budget_total": 5000,
            "budget_spent": 1200,
            "description": "Orientation week for incoming students",
        },
    )
    basant = await store.insert(
        "events",
        {
            "name": "Basant Festival",
            "event_type": "Basant",
            "date_start": "2027-02-14",
            "location": "Sports Complex",
            "status": "planning",
            "budget_total": 3000,
            "budget_spent": 0,
        },
    )

    # --- Tasks ---
    tasks = [
        (oweek["id"], "Book sound system", "in_progress", "high", "logistics", "bilal", "2026-08-25"),
        (oweek["id"], "Print welcome packs", "todo", "medium", "props", "ayesha", "2026-08-28"),
        (oweek["id"], "Order snacks", "todo", "high", "food", "omar", None),
        (oweek["id"], "Finalize sponsor list", "completed", "low", "sponsors", "ayesha", "2026-08-10"),
        (basant["id"], "Kite supplier quotes", "todo", "medium", "props", "bilal", "2027-01-20"),
    ]
    for event_id, title, status, priority, category, who, due in tasks:
        await store.insert(
            "tasks",
            {
                "event_id": event_id,
                "title": title,
                "status": status,
                "priority": priority,
                "category": category,
                "assigned_to": members[who],
                "due_date": due,
            },
        )

    # --- Content pipeline ---
    for title, platform, status in [
        ("Campus tour reel", "instagram", "in_production"),
        ("Meet the team carousel", "instagram", "planned"),
        ("Freshers dance challenge", "tiktok", "idea"),
    ]:
        await store.insert(
            "content_ideas",
            {"event_id": oweek["id"], "title": title, "platform": platform, "status": status},
        )

    # --- Budget & inventory ---
    for description, category, estimated, actual in [
        ("Sound system rental", "Logistics", 800, 750),
        ("Welcome packs", "Props", 400, 450),
        ("Snacks", "Food", 600, 0),
    ]:
        await store.insert(
            "budget_items",
            {
                "event_id": oweek["id"],
                "description": description,
                "category": category,
                "estimated_cost": estimated,
                "actual_cost": actual,
            },
        )
    for name, quantity, status in [
        ("Banners", 6, "acquired"),
        ("Extension cords", 10, "needed"),
        ("Folding tables", 12, "available"),
    ]:
        await store.insert(
            "inventory_items",
            {"event_id": oweek["id"], "name": name, "quantity": quantity, "status": status},
        )

    # --- Meetings & bugs ---
    await store.insert(
        "meetings",
        {
            "title": "O-Week kickoff",
            "date": "2026-08-15T17:00:00",
            "location": "Society Room",
            "agenda": "Roles, timeline, sponsors",
            "attendees": [members["ayesha"], members["bilal"]],
            "event_id": oweek["id"],
        },
    )
    await store.insert(
        "bugs_and_issues",
        {
            "title": "Budget chart overlaps",
            "description": "The budget chart overlaps the totals row on narrow screens.",
            "priority": "low",
            "reported_by": "Sara Malik",
        },
    )

    logger.info("Seeded demo data")
    return True
