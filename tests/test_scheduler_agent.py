# tests/test_scheduler_agent.py
import schedule

from news_collector.agents import scheduler_agent
from news_collector.agents.scheduler_agent import SchedulerAgent
from news_collector.config.settings import CRAWL_INTERVAL_MINUTES


class StubCrawler:
    def __init__(self, results=None, error=None):
        self.results = results
        self.error = error
        self.calls = 0

    def crawl_all(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.results


RESULTS = {
    "total": 5,
    "new": 3,
    "errors": 1,
    "sections": {"POLITICS": {"collected": 5, "new": 3}, "SOCIAL": {"collected": 0, "new": 0, "error": "timeout"}},
}


class TestCollectNews:
    def test_updates_stats(self):
        agent = SchedulerAgent(crawler=StubCrawler(RESULTS), scheduler=schedule.Scheduler())

        assert agent.collect_news() == RESULTS
        agent.collect_news()

        assert agent.stats["runs"] == 2
        assert agent.stats["total_saved"] == 6
        assert agent.stats["errors"] == 2
        assert agent.stats["last_crawl"] is not None

    def test_crawl_failure_does_not_raise(self):
        agent = SchedulerAgent(crawler=StubCrawler(error=RuntimeError("db locked")), scheduler=schedule.Scheduler())

        results = agent.collect_news()

        assert results["new"] == 0
        assert results["errors"] == 1
        assert agent.stats["errors"] == 1
        assert agent.stats["runs"] == 0
        assert agent.stats["last_crawl"] is None


class TestSchedule:
    def test_single_fixed_delay_job(self):
        scheduler = schedule.Scheduler()
        agent = SchedulerAgent(crawler=StubCrawler(RESULTS), scheduler=scheduler)

        agent.setup_schedule()

        assert len(scheduler.jobs) == 1
        job = scheduler.jobs[0]
        assert job.interval == CRAWL_INTERVAL_MINUTES
        assert job.unit == "minutes"

    def test_job_runs_crawl(self):
        scheduler = schedule.Scheduler()
        crawler = StubCrawler(RESULTS)
        agent = SchedulerAgent(crawler=crawler, scheduler=scheduler)
        agent.setup_schedule()

        scheduler.run_all()

        assert crawler.calls == 1
        assert agent.stats["runs"] == 1

    def test_stop(self):
        agent = SchedulerAgent(crawler=StubCrawler(RESULTS), scheduler=schedule.Scheduler())
        agent.stop()
        assert agent.running is False


class RecordingScheduler(schedule.Scheduler):
    def __init__(self, events):
        super().__init__()
        self.events = events

    def every(self, interval=1):
        self.events.append("schedule")
        return super().every(interval)


class RecordingCrawler(StubCrawler):
    def __init__(self, events):
        super().__init__(RESULTS)
        self.events = events

    def crawl_all(self):
        self.events.append("crawl")
        return super().crawl_all()


class TestRun:
    def make_agent(self, monkeypatch, events):
        monkeypatch.setattr(scheduler_agent, "init_db", lambda: None)
        agent = SchedulerAgent(crawler=RecordingCrawler(events), scheduler=RecordingScheduler(events))
        agent.stop()
        return agent

    def test_job_armed_after_initial_run(self, monkeypatch):
        events = []
        self.make_agent(monkeypatch, events).run(run_immediately=True)
        assert events == ["crawl", "schedule"]

    def test_no_immediate_run(self, monkeypatch):
        events = []
        self.make_agent(monkeypatch, events).run(run_immediately=False)
        assert events == ["schedule"]
