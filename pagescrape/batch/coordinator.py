"""
Batch Coordinator - Paces an ordered list of requests in chunks and collects
one Outcome per request without letting a single failure stop the run
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, List, Sequence

from ..config import ScrapeRequest, ScraperConfig
from ..errors import EngineLaunchError
from ..scraper.base import WebScraper
from ..scraper.result import Failure, Outcome
from .models import BatchJob, BatchReport

logger = logging.getLogger(__name__)


class BatchCoordinator:
    """Runs BatchJobs through a shared WebScraper"""

    def __init__(self, scraper: WebScraper,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.scraper = scraper
        self.sleep = sleep

    async def run(self, job: BatchJob) -> BatchReport:
        """
        Process every request of job in order

        Raises:
            EngineLaunchError: if the rendering engine cannot be started
        """
        start_time = time.time()
        chunks = job.chunks()
        outcomes: List[Outcome] = []

        logger.info(f"Starting bulk scraping of {len(job.requests)} URLs in {len(chunks)} batch(es)")

        # Launch once up front so an engine failure aborts before any item runs
        await self.scraper.start()

        for index, chunk in enumerate(chunks):
            logger.info(f"Processing batch {index + 1}/{len(chunks)}")

            if job.concurrent:
                outcomes.extend(await self._run_concurrent(chunk))
            else:
                for request in chunk:
                    outcomes.append(await self._run_one(request))

            if index < len(chunks) - 1 and job.inter_chunk_delay > 0:
                logger.debug(f"Waiting {job.inter_chunk_delay}ms before next batch")
                await self.sleep(job.inter_chunk_delay / 1000)

        report = BatchReport(outcomes=outcomes, duration=time.time() - start_time)
        logger.info(
            f"Bulk scraping completed: {report.success_count}/{report.total} successful "
            f"({report.success_rate * 100:.1f}%)"
        )
        return report

    async def run_urls(self, urls: Sequence[str], config: ScraperConfig = None,
                       batch_size: int = 5, delay: float = 1000,
                       concurrent: bool = False) -> BatchReport:
        config = config or self.scraper.config
        job = BatchJob.from_urls(urls, config, batch_size=batch_size,
                                 inter_chunk_delay=delay, concurrent=concurrent)
        return await self.run(job)

    async def _run_one(self, request: ScrapeRequest) -> Outcome:
        try:
            return await self.scraper.scrape(request)
        except EngineLaunchError:
            raise
        except Exception as e:
            logger.warning(f"Request for {request.url} failed: {e}")
            return Failure(str(request.url), error=str(e))

    async def _run_concurrent(self, chunk: Sequence[ScrapeRequest]) -> List[Outcome]:
        # gather keeps results in argument order
        results = await asyncio.gather(
            *(self._run_one(request) for request in chunk),
            return_exceptions=True
        )
        outcomes = []
        for request, result in zip(chunk, results):
            if isinstance(result, EngineLaunchError):
                raise result
            if isinstance(result, BaseException):
                result = Failure(str(request.url), error=str(result))
            outcomes.append(result)
        return outcomes
