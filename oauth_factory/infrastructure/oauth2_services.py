"""
Built-in OAuth 2.0 provider implementations.
"""

from oauth_factory.core.oauth_service import OAuth2Service


class GitHub(OAuth2Service):
    """GitHub OAuth 2.0 implementation."""

    service_name = "GitHub"
    base_api_uri = "https://api.github.com/"
    scope_delimiter = ","

    # Read-only access to public information
    SCOPE_READONLY = ""
    SCOPE_USER = "user"
    SCOPE_USER_EMAIL = "user:email"
    SCOPE_USER_FOLLOW = "user:follow"
    SCOPE_PUBLIC_REPO = "public_repo"
    SCOPE_REPO = "repo"
    SCOPE_REPO_STATUS = "repo:status"
    SCOPE_DELETE_REPO = "delete_repo"
    SCOPE_NOTIFICATIONS = "notifications"
    SCOPE_GIST = "gist"
    SCOPE_READ_ORG = "read:org"

    @property
    def authorization_endpoint(self) -> str:
        return "https://github.com/login/oauth/authorize"

    @property
    def access_token_endpoint(self) -> str:
        return "https://github.com/login/oauth/access_token"


class Google(OAuth2Service):
    """Google OAuth 2.0 / OpenID Connect implementation."""

    base_api_uri = "https://www.googleapis.com/oauth2/v2/"

    SCOPE_OPENID = "openid"
    SCOPE_EMAIL = "https://www.googleapis.com/auth/userinfo.email"
    SCOPE_PROFILE = "https://www.googleapis.com/auth/userinfo.profile"
    SCOPE_DRIVE = "https://www.googleapis.com/auth/drive"
    SCOPE_DRIVE_READONLY = "https://www.googleapis.com/auth/drive.readonly"
    SCOPE_GMAIL = "https://mail.google.com/"
    SCOPE_GMAIL_SEND = "https://www.googleapis.com/auth/gmail.send"
    SCOPE_CALENDAR = "https://www.googleapis.com/auth/calendar"
    SCOPE_CALENDAR_READONLY = "https://www.googleapis.com/auth/calendar.readonly"
    SCOPE_YOUTUBE = "https://www.googleapis.com/auth/youtube"
    SCOPE_PHOTOSLIBRARY = "https://www.googleapis.com/auth/photoslibrary"

    @property
    def authorization_endpoint(self) -> str:
        return "https://accounts.google.com/o/oauth2/v2/auth"

    @property
    def access_token_endpoint(self) -> str:
        return "https://oauth2.googleapis.com/token"

    def get_authorization_uri(self, **params: str) -> str:
        # Ask for a refresh token unless the caller says otherwise
        params.setdefault("access_type", "offline")
        return super().get_authorization_uri(**params)


class Facebook(OAuth2Service):
    """Facebook OAuth 2.0 implementation."""

    base_api_uri = "https://graph.facebook.com/"
    scope_delimiter = ","

    SCOPE_EMAIL = "email"
    SCOPE_PUBLIC_PROFILE = "public_profile"
    SCOPE_USER_FRIENDS = "user_friends"
    SCOPE_USER_BIRTHDAY = "user_birthday"
    SCOPE_USER_LOCATION = "user_location"
    SCOPE_USER_PHOTOS = "user_photos"
    SCOPE_USER_POSTS = "user_posts"
    SCOPE_PAGES_SHOW_LIST = "pages_show_list"

    @property
    def authorization_endpoint(self) -> str:
        return "https://www.facebook.com/dialog/oauth"

    @property
    def access_token_endpoint(self) -> str:
        return "https://graph.facebook.com/oauth/access_token"


class Bitbucket(OAuth2Service):
    """Bitbucket Cloud OAuth 2.0 implementation."""

    base_api_uri = "https://api.bitbucket.org/2.0/"

    SCOPE_ACCOUNT = "account"
    SCOPE_EMAIL = "email"
    SCOPE_REPOSITORY = "repository"
    SCOPE_REPOSITORY_WRITE = "repository:write"
    SCOPE_PULLREQUEST = "pullrequest"
    SCOPE_ISSUE = "issue"
    SCOPE_WEBHOOK = "webhook"

    @property
    def authorization_endpoint(self) -> str:
        return "https://bitbucket.org/site/oauth2/authorize"

    @property
    def access_token_endpoint(self) -> str:
        return "https://bitbucket.org/site/oauth2/access_token"


# Keys are normalized names; "GitHub" is listed too since only the first
# character of a requested name is normalized
BUILTIN_OAUTH2_SERVICES = {
    "Github": GitHub,
    "GitHub": GitHub,
    "Google": Google,
    "Facebook": Facebook,
    "Bitbucket": Bitbucket,
}
