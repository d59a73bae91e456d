"""
Stores and workflows.

- accounts: Account Store (users collection)
- jobs: Job Store (pending_jobs / published_jobs collections)
- applications: submit applications, change application status
- lifecycle: post, approve and reject job postings
"""

from talentlink.services.accounts import AccountStore
from talentlink.services.applications import (
    ApplicationStatus,
    submit_application,
    update_application_status,
)
from talentlink.services.jobs import JobStore
from talentlink.services.lifecycle import (
    approve_pending_job,
    post_job,
    reject_pending_job,
    split_list,
)

__all__ = [
    "AccountStore",
    "JobStore",
    "ApplicationStatus",
    "submit_application",
    "update_application_status",
    "post_job",
    "approve_pending_job",
    "reject_pending_job",
    "split_list",
]
