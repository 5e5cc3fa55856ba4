from __future__ import annotations


from pydantic_settings import BaseSettings


class JiraSettings(BaseSettings):
    """
    Env vars:
      JIRA_BASE_URL=https://your-domain.atlassian.net
      JIRA_EMAIL=you@example.com
      JIRA_API_TOKEN=xxxxxxxxxxxxxxxxxxxx
      JIRA_HTTP_TIMEOUT=15
    """

    base_url: str = ""
    email: str = ""
    api_token: str = ""
    http_timeout: float = 15.0

    class Config:
        env_prefix = "JIRA_"
        env_file = ".env"
        extra = "ignore"


def get_settings() -> JiraSettings:
    return JiraSettings()
