"""Plain-text formatting of pull requests and comments for the terminal."""

from .models import Comment, Pull


SEPARATOR = "=" * 60


class PullFormatter:
    """Formats GitHub objects for CLI output."""

    @staticmethod
    def format_pull_line(pull: Pull) -> str:
        draft = " (draft)" if pull.draft else ""
        return f"#{pull.number} [{pull.display_state}]{draft} {pull.title} (@{pull.author})"

    @staticmethod
    def format_pull_details(pull: Pull) -> str:
        """Multi-line summary of a pull request, body last."""
        draft = " (draft)" if pull.draft else ""
        labels = ", ".join(pull.labels) if pull.labels else "-"
        assignees = ", ".join(pull.assignees) if pull.assignees else "-"

        lines = [
            f"#{pull.number} {pull.title}",
            f"State: {pull.display_state}{draft}",
            f"Author: @{pull.author}",
            f"Base: {pull.base_ref}   Head: {pull.head_ref}",
            f"Created: {pull.created_at}   Updated: {pull.updated_at}",
            f"URL: {pull.html_url}",
            "",
            f"Stats: {pull.commits} commits, {pull.changed_files} files, +{pull.additions} -{pull.deletions}",
            f"Labels: {labels}",
            f"Assignees: {assignees}",
        ]
        if pull.milestone:
            lines.append(f"Milestone: {pull.milestone}")
        lines.extend(["", "Body:", pull.body])
        return "\n".join(lines)

    @staticmethod
    def format_comments(repo: str, number: int, issue: list[Comment], review: list[Comment]) -> str:
        """Conversation comments followed by inline review comments."""
        lines = [f"Comments on PR #{number} in {repo}", SEPARATOR, "", "### Issue comments (conversation) ###", ""]
        if not issue:
            lines.append("(no comments)")
        for c in issue:
            lines.extend([f"- @{c.author} {c.created_at}", c.html_url, c.body, ""])

        lines.extend(["", "### Review comments (inline) ###", ""])
        if not review:
            lines.append("(no review comments)")
        for c in review:
            lines.extend(
                [
                    f"- @{c.author} {c.created_at}",
                    c.html_url,
                    f"File: {c.path}  Line: {c.line or 0}",
                    c.body,
                    "",
                ]
            )
        return "\n".join(lines)
