from rest_framework_simplejwt.tokens import AccessToken


class CustomAccessToken(AccessToken):
    """Access token that carries the user's email and role"""

    @classmethod
    def for_user(cls, user):
        """Create access token with custom claims"""
        token = super().for_user(user)
        token["email"] = user.email
        token["role"] = user.role
        token["name"] = user.name

        return token


def issue_token(user) -> str:
    return str(CustomAccessToken.for_user(user))
