import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from dealdesk.core.logging_config import configure_logging
from dealdesk.seed_data import build_workspace


def view_pipeline(user_id: str, query: str) -> None:
    workspace = build_workspace()
    viewer = workspace.settings.get_user(user_id)

    print("\n" + "=" * 50)
    print(f"PIPELINE for {viewer.name} ({viewer.role.value})")
    print("=" * 50)
    summary = workspace.deals.board_summary(viewer, query)
    print(summary.to_string(index=False))

    print("\n" + "=" * 50)
    print("DEALS")
    print("=" * 50)
    deals = workspace.deals.visible_deals(viewer, query)
    if not deals:
        print("No deals match this view.")
    for deal in deals:
        entity, amount = workspace.deals.localized_value(deal.id)
        print(f"{deal.id:>3}  {deal.title:<32} {deal.stage.value:<12} {entity.name:<28} {amount:>14,.2f} {entity.currency}")

    print("\n" + "=" * 50)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print the kanban board for a demo user.")
    parser.add_argument("--user", default="u1", help="Viewer user id (default: u1, a sales rep)")
    parser.add_argument("--query", default="", help="Smart search query, e.g. 'stage:proposal acme'")
    args = parser.parse_args()
    configure_logging()
    view_pipeline(args.user, args.query)
