"""Shared constants used across the application."""

# Bot Identity Constants
# ----------------------

DEFAULT_BOT_USERNAME = "backstroke-bot"
"""Username of the machine user that opens pull requests when none is configured."""

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub REST API base URL."""

DEFAULT_GITHUB_API_TIMEOUT = 5.0
"""Seconds allowed for a single GitHub API call before it is treated as failed."""

# Pagination Constants
# --------------------

DEFAULT_PAGE_SIZE = 100
"""Largest page size the GitHub REST API accepts."""

FIRST_PAGE = 1
"""GitHub numbers pages from 1 (page 0 is served as page 1)."""

# Opt-out Constants
# -----------------

OPT_OUT_LABEL = "optout"
"""A repository with at least one open issue carrying this label declines automatic pull requests."""

# Messages
# --------

LINK_NOT_ENABLED_MESSAGE = "Link is not enabled."
LINK_INCOMPLETE_MESSAGE = "Please define both an upstream and fork on this link."
OPTED_OUT_MESSAGE = "This repo opted out of backstroke pull requests"

PULL_REQUEST_TITLE_TEMPLATE = "Update from upstream repo {owner}/{repo}@{branch}"
"""Title of every pull request proposed to a fork."""

PULL_REQUEST_BODY_TEMPLATE = """Hello!
The remote `{owner}/{repo}@{branch}` has some new changes that aren't in this fork.
So, here they are, ready to be merged! :tada:

If this pull request can be merged without conflict, you can publish your software
with these new changes. Otherwise, fix any merge conflicts by clicking the `Resolve Conflicts`
button.

Have fun!
--------
Created by [Backstroke](http://backstroke.co) (I'm a bot!)
"""
"""Body of every pull request proposed to a fork."""
