# scripts/view_feedback.py
"""Print every stored plan rating, newest first."""
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.app.core import settings
from backend.app.services.feedback_service import FeedbackService


def main():
    rows = FeedbackService().list_all()
    print(f"Database: {settings.DATABASE_URL}")
    print(f"Feedback entries found: {len(rows)}")
    print("-----------------------------")

    if not rows:
        print("No feedback entries found.")
        return

    for i, row in enumerate(rows, start=1):
        print(f"Entry #{i}:")
        print(f"ID: {row.id}")
        print(f"Timestamp: {row.timestamp}")
        print(f"Plan ID: {row.plan_id}")
        print(f"Step ID: {row.step_id if row.step_id is not None else 'N/A'}")
        print(f"Rating: {row.rating}")
        print(f"Comment: {row.comment or 'N/A'}")
        print(f"User ID: {row.user_id}")
        print("-----------------------------")


if __name__ == "__main__":
    main()
