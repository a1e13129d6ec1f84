"""Issue change log service package.

Serves the access-gated activity feed (field changes, comments and
attachments) for Jira issues.
"""
