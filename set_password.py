"""
Resets a user's password from the command line.

    python set_password.py <username> <new_password>
"""
import sys
from app import create_app
from app.extensions import db
from app.models import User


def set_password(username, new_password):
    user = User.query.filter_by(username=username).first()
    if not user:
        print(f"❌ User \"{username}\" not found")
        return False

    user.set_password(new_password)
    db.session.commit()
    print(f"✅ Password updated successfully for user: {user.username} ({user.role})")
    return True


if __name__ == '__main__':
    if len(sys.argv) != 3:
        print("Usage: python set_password.py <username> <new_password>")
        print("Example: python set_password.py superadmin superadmin123")
        sys.exit(1)

    app = create_app()
    with app.app_context():
        ok = set_password(sys.argv[1], sys.argv[2])

    print("\n✅ Done! You can now login with the new password." if ok else "\n❌ Failed to update password.")
    sys.exit(0 if ok else 1)
