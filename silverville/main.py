"""Main entry point: a simulated day in SilverVille"""
import logging
import asyncio
import random

from silverville.config import validate_config, LOG_LEVEL, ENABLE_REMOTE_SERVICES, WALK_GOAL
from silverville.capabilities import LoggingSpeech, SimulatedPedometer
from silverville.gamification.daily import close_day
from silverville.gamification.ledger import ProgressionLedger
from silverville.gamification.cafe_rounds import fetch_rounds, CafeRoundGenerator
from silverville.models.session import CafePhase, WalkPhase
from silverville.services.container import init_container
from silverville.services.remote_client import RemoteClient

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL)
)

logger = logging.getLogger(__name__)

DEMO_STEPS_PER_TICK = 250
DEMO_TICK_SECONDS = 0.01


async def _wait_for(predicate, timeout: float = 10.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise TimeoutError("Demo session did not advance")
        await asyncio.sleep(DEMO_TICK_SECONDS)


async def run_walk(container, pedometer: SimulatedPedometer) -> None:
    """Walk to the goal, answering every quiz correctly"""
    walk = container.walk_session
    walk.auto_advance_delay = 0.05
    await walk.initialize()
    walk.start()

    while not walk.reward_granted:
        pedometer.step(DEMO_STEPS_PER_TICK)
        if walk.phase is WalkPhase.QUIZ:
            walk.select_answer(walk.current_quiz.correct_choice)
            await _wait_for(lambda: walk.phase is not WalkPhase.RESULT)
        await asyncio.sleep(DEMO_TICK_SECONDS)

    summary = walk.finish()
    logger.info(f"Walk summary: {summary}")
    await walk.report(container.remote_client)


async def run_cafe(container) -> None:
    """Play one cafe session, getting every order right"""
    cafe = container.cafe_session
    cafe.auto_advance_delay = 0.05
    rounds = await fetch_rounds(container.remote_client, CafeRoundGenerator(container.rng))
    cafe.start(rounds)

    while cafe.phase is not CafePhase.RESULT:
        await _wait_for(lambda: cafe.phase in (CafePhase.CHOOSING, CafePhase.RESULT))
        if cafe.phase is CafePhase.CHOOSING:
            cafe.select(cafe.current_round.correct_item.id)
            await _wait_for(lambda: cafe.phase is not CafePhase.FEEDBACK)

    logger.info(f"Cafe result: {cafe.result}")


async def main() -> None:
    """Main application entry point"""
    remote = None
    try:
        # Validate configuration
        logger.info("Validating configuration...")
        validate_config()

        if ENABLE_REMOTE_SERVICES:
            logger.info("Remote services enabled")
            remote = RemoteClient()

        ledger = ProgressionLedger(walk_goal=WALK_GOAL)
        pedometer = SimulatedPedometer(start_reading=12000)
        container = init_container(
            ledger=ledger,
            sensor=pedometer,
            speech=LoggingSpeech(),
            remote_client=remote,
            rng=random.Random(),
        )
        await container.load_remote_quizzes()

        await container.diet_service.process_meal()
        await run_walk(container, pedometer)
        await run_cafe(container)

        logger.info(f"Health score: {ledger.health_score()}")
        logger.info(f"Village level {ledger.village_level} ({ledger.village_exp} EXP)")
        logger.info(f"Day closed: {close_day(ledger)}")

    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
    finally:
        if remote:
            await remote.close()
        logger.info("Shutdown complete")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
