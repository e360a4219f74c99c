#!/usr/bin/env python3
"""
Quick script to see the taggable plugin working
"""

from datetime import datetime

from bson import ObjectId

from taggable import Schema, model, taggable


def demo_tagging():
    print("=" * 60)
    print("Taggable Demo")
    print("=" * 60)

    # Build models
    print("\n1. Building models...")
    user_schema = Schema({"name": {"type": str, "taggable": True}})
    user_schema.plugin(taggable)
    User = model("User", user_schema)

    repo_schema = Schema({
        "name": {"type": str, "taggable": True},
        "created": {"type": datetime, "taggable": True},
        "topics": {"type": [str], "taggable": True},
        "owner": {"type": ObjectId, "ref": "User", "taggable": True},
    })
    repo_schema.plugin(taggable, blacklist=["any"])
    Repo = model("Repo", repo_schema)
    print(f"✓ Repo taggable fields: {', '.join(Repo.TAGGABLE_FIELDS)}")

    # Tag from fields
    print("\n2. Tagging from fields...")
    owner = User(name="John Boe")
    repo = Repo(
        name="any-js",
        created="2019-01-01",
        topics=["Mongo and Node"],
        owner=owner
    )
    print(f"✓ {repo.tag()}")

    # Explicit tags
    print("\n3. Adding explicit tags...")
    print(f"✓ {repo.tag('js', 'NodeJS', 'express', 'mongodb')}")

    # Untag
    print("\n4. Removing tags...")
    print(f"✓ {repo.untag('express', 'angular')}")

    # Hook
    print("\n5. Running validate hook...")
    repo.validate()
    print(f"✓ {repo.tags}")
    print(f"✓ Hidden from to_dict(): {'tags' not in repo.to_dict()}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    demo_tagging()
