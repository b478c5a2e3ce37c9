from mac_agent.schemas.jobs import CreateJobRequest, Job, JobStatus, SkillContext
from mac_agent.schemas.settings import Provider, RepoConfig, RepoInfo, RunnerHealth, Settings

__all__ = [
    "CreateJobRequest",
    "Job",
    "JobStatus",
    "SkillContext",
    "Provider",
    "RepoConfig",
    "RepoInfo",
    "RunnerHealth",
    "Settings",
]
