#!/usr/bin/env python3
"""Re-seed every storefront's settings from a catalog template."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from briklyst.core.database import SessionLocal  # noqa: E402
from briklyst.core.errors import BriklystError  # noqa: E402
from briklyst.models.user import User  # noqa: E402
from briklyst.services.storefront_settings import upsert_settings  # noqa: E402
from briklyst.services.template_catalog import TEMPLATES, find_template_by_id  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply a catalog template to every storefront.")
    parser.add_argument(
        "--template",
        required=True,
        choices=[template.id for template in TEMPLATES],
        help="Template ID",
    )
    parser.add_argument(
        "--keep-overrides",
        action="store_true",
        help="Keep each storefront's existing override tree",
    )
    parser.add_argument("--dry-run", action="store_true", help="List affected users without writing")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    template = find_template_by_id(args.template)

    # clearing theme_id lets the template's own default theme apply
    changes = {"template_id": template.id, "theme_id": None}
    if not args.keep_overrides:
        changes["template_overrides"] = None

    db = SessionLocal()
    updated = 0
    failed = 0
    try:
        users = db.query(User).order_by(User.id).all()
        for user in users:
            if args.dry_run:
                print(f"would update user_id={user.id} name={user.name}")
                continue
            try:
                upsert_settings(db, user, changes)
            except BriklystError as exc:
                failed += 1
                print(f"failed user_id={user.id}: {exc.message}")
                continue
            updated += 1
    finally:
        db.close()

    print(f"template={template.id} updated={updated} failed={failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
