def normalize_user(user):
    # never expose the password hash
    return {
        "id": user.id,
        "username": user.username,
        "role": user.role,
    }
