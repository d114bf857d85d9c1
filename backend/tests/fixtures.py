"""
Noteful Backend: Test Fixture Data
==================================

Rows used to seed the test database, plus the escaped forms the API is
expected to return for the malicious ones.
"""

from datetime import datetime, timezone


def make_folders_array():
    return [
        {"id": 1, "name": "Important"},
        {"id": 2, "name": "Super"},
        {"id": 3, "name": "Spangley"},
        {"id": 4, "name": "Groovy"},
    ]


def make_malicious_folder():
    malicious_folder = {
        "id": 42,
        "name": 'Inject <script>alert("xss");</script>',
    }
    sanitized_folder = {
        **malicious_folder,
        "name": 'Inject &lt;script&gt;alert("xss");&lt;/script&gt;',
    }
    return malicious_folder, sanitized_folder


def make_notes_array():
    return [
        {
            "id": 1,
            "name": "Dogs",
            "modified": datetime(2019, 1, 3, 0, 0, tzinfo=timezone.utc),
            "folder_id": 1,
            "content": "Corporis accusamus placeat quas non voluptas.",
        },
        {
            "id": 2,
            "name": "Cats",
            "modified": datetime(2018, 8, 15, 7, 0, tzinfo=timezone.utc),
            "folder_id": 2,
            "content": "Eos laudantium quia ab blanditiis temporibus.",
        },
        {
            "id": 3,
            "name": "Pigs",
            "modified": datetime(2018, 3, 1, 8, 0, tzinfo=timezone.utc),
            "folder_id": 3,
            "content": "Occaecati dignissimos quam qui facere deserunt.",
        },
        {
            "id": 4,
            "name": "Birds",
            "modified": datetime(2019, 1, 4, 8, 0, tzinfo=timezone.utc),
            "folder_id": 1,
            "content": "Eum culpa odit. Veniam porro molestiae dolores.",
        },
    ]


def make_malicious_note():
    malicious_note = {
        "id": 911,
        "name": 'Naughty naughty very naughty <script>alert("xss");</script>',
        "modified": datetime(2019, 1, 3, 0, 0, tzinfo=timezone.utc),
        "folder_id": 1,
        "content": 'Bad image <img src="https://url.to.file.which/does-not.exist" '
                   'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.',
    }
    sanitized_note = {
        **malicious_note,
        "name": 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
        "content": 'Bad image &lt;img src="https://url.to.file.which/does-not.exist" '
                   'onerror="alert(document.cookie);"&gt;. But not &lt;strong&gt;all&lt;/strong&gt; bad.',
    }
    return malicious_note, sanitized_note


def as_api_note(note: dict) -> dict:
    """Fixture row → the fields the API reports, minus `modified`."""
    return {
        "id": note["id"],
        "name": note["name"],
        "folderId": note["folder_id"],
        "content": note["content"],
    }


def without_modified(note: dict) -> dict:
    return {k: v for k, v in note.items() if k != "modified"}


async def insert_rows(session_factory, model, rows):
    async with session_factory() as session:
        session.add_all([model(**row) for row in rows])
        await session.commit()
