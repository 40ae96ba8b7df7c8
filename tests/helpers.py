def user_record(user_id, username, email=None):
    return {
        "id": user_id,
        "email": email or f"{username.lower()}@example.com",
        "username": username,
        "passwordHash": "!",
        "createdAt": 1700000000000,
    }
