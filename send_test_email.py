# send_test_email.py
import sys

from tattoo_workshop.database import create_db_and_tables, new_session
from tattoo_workshop.services.notification_queue import get_email_service


def main():
    if len(sys.argv) != 2:
        print("Usage: python send_test_email.py you@example.com")
        sys.exit(2)

    to_email = sys.argv[1]
    print(f"Sending test email to {to_email} using the stored email settings...")

    create_db_and_tables()
    with new_session() as session:
        result = get_email_service().send_test_email(session, to_email)

    if not result.success:
        print(f"Failed: {result.message}")
        sys.exit(1)

    print("If no errors: email sent! Check your inbox.")


if __name__ == "__main__":
    main()
