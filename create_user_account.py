"""
Register a new business (tenant + admin user) against a running API.

    python create_user_account.py owner@acme.com secret123 acme "Acme Cleaning"
"""
import sys

from bizboard.client import ApiError, DashboardClient

BASE_URL = "http://localhost:5000"


def main():
    if len(sys.argv) < 4:
        print("Usage: python create_user_account.py <email> <password> <subdomain> "
              "[company_name] [business_type] [first_name] [last_name]")
        sys.exit(1)

    email, password, subdomain = sys.argv[1:4]
    company_name = sys.argv[4] if len(sys.argv) > 4 else subdomain.title()
    business_type = sys.argv[5] if len(sys.argv) > 5 else "cleaning"
    first_name = sys.argv[6] if len(sys.argv) > 6 else "Admin"
    last_name = sys.argv[7] if len(sys.argv) > 7 else "User"

    client = DashboardClient(BASE_URL)
    try:
        auth = client.register(
            email=email,
            password=password,
            firstName=first_name,
            lastName=last_name,
            companyName=company_name,
            subdomain=subdomain,
            businessType=business_type,
        )
    except ApiError as exc:
        print(f"❌ Registration failed ({exc.status_code}): {exc.message}")
        sys.exit(1)

    print("✅ Account created")
    print(f"   User ID: {auth['user']['id']} ({auth['user']['role']})")
    print(f"   Tenant: {auth['tenant']['name']} [{auth['tenant']['subdomain']}]")


if __name__ == "__main__":
    main()
