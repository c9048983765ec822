"""
Build service for repository jobs.

This module creates one repository job per architecture of a distro and
runs the jobs concurrently, sharing a single OutputStore.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence, Union

from ..models.config import BuildConfig
from ..models.results import JobResult
from ..protocols import CommandRunnerProtocol, IndexPageBuilderProtocol, SignerProtocol
from ..repository.job import DebRepositoryJob
from ..utils.constants import DEFAULT_MAX_WORKERS
from ..utils.error_handling import handle_generic_error
from ..utils.logging_utils import format_count_with_unit, log_list_items, log_summary_separator
from ..utils.output_store import OutputStore

JOB_THREAD_PREFIX = "repo_job"


def build_jobs(  # pylint: disable=too-many-arguments
    config: BuildConfig,
    distro_name: str,
    *,
    local_root: Union[str, os.PathLike],
    packages: Sequence[Union[str, os.PathLike]],
    output_store: OutputStore,
    runner: CommandRunnerProtocol,
    signer: SignerProtocol,
    index_builder: IndexPageBuilderProtocol,
    architectures: Optional[Sequence[str]] = None,
) -> List[DebRepositoryJob]:
    """
    Create the repository jobs for a distro.

    Args:
        config: Build configuration
        distro_name: Name of the distro in the configuration
        local_root: Local directory holding the repository trees
        packages: Package files to inject
        output_store: Store shared by all jobs
        runner: Command runner for external tools
        signer: Signing collaborator
        index_builder: Index page collaborator
        architectures: Architectures to build (default: all of the distro's)

    Returns:
        One job per architecture, in the distro's architecture order

    Raises:
        ValueError: If the distro or an architecture is unknown
    """
    distro = config.get_distro(distro_name)

    if architectures:
        unknown = [arch for arch in architectures if arch not in distro.architectures]
        if unknown:
            raise ValueError(
                f"Architecture(s) {', '.join(unknown)} not defined for distro '{distro.name}' "
                f"(available: {distro.architecture_list})"
            )
        selected = [arch for arch in distro.architectures if arch in architectures]
    else:
        selected = list(distro.architectures)

    if not distro.repos:
        logging.warning("Distro %s has no repositories configured", distro.name)

    return [
        DebRepositoryJob(
            distro,
            arch,
            config,
            output_store,
            runner,
            signer,
            index_builder,
            local_root,
            packages,
        )
        for arch in selected
    ]


def _run_job(job: DebRepositoryJob) -> JobResult:
    if not job.should_run():
        logging.info("Skipping job %s", job.job_id)
        return job.result(skipped=True)
    return job.run()


def run_jobs(jobs: Sequence[DebRepositoryJob], max_workers: int = DEFAULT_MAX_WORKERS) -> List[JobResult]:
    """
    Run repository jobs concurrently.

    Args:
        jobs: Jobs to run
        max_workers: Maximum number of concurrent jobs

    Returns:
        Job results in the order of ``jobs``
    """
    if not jobs:
        return []

    results: Dict[str, JobResult] = {}
    with ThreadPoolExecutor(thread_name_prefix=JOB_THREAD_PREFIX, max_workers=max_workers) as executor:
        future_to_job = {executor.submit(_run_job, job): job for job in jobs}

        for future in as_completed(future_to_job):
            job = future_to_job[future]
            try:
                results[job.job_id] = future.result()
            except Exception as e:  # pylint: disable=broad-except
                # record the crash and keep collecting the other jobs
                handle_generic_error(e, f"job {job.job_id}")
                result = job.result()
                result.errors.append(str(e))
                results[job.job_id] = result

    return [results[job.job_id] for job in jobs]


def log_results_summary(results: Sequence[JobResult]) -> None:
    """Log a summary of job results."""
    failed = [result for result in results if not result.success]
    skipped = [result for result in results if result.skipped]

    log_summary_separator("REPOSITORY BUILD SUMMARY")
    logging.warning(
        "%s run, %s skipped, %s failed",
        format_count_with_unit(len(results) - len(skipped), "job"),
        format_count_with_unit(len(skipped), "job"),
        format_count_with_unit(len(failed), "job"),
    )
    for result in failed:
        logging.error("Job %s failed:", result.job_id)
        log_list_items(result.errors, level=logging.ERROR)


__all__ = ["build_jobs", "run_jobs", "log_results_summary"]
