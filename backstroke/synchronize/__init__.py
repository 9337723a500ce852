"""Resolution of fork targets and proposal of pull requests for queued links."""
