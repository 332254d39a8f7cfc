import asyncio
from uuid import UUID
from src.database import AsyncSessionLocal
from src.projects.models import Project
from src.projects.service import ProjectService

DEMO_PROJECT_ID = UUID("00000000-0000-0000-0000-000000000001")
DEMO_OWNER_ID = "demo-owner"

# A fully answered static interview, enough to run the static pipeline end to end
DEMO_ANSWERS = {
    "invention_title": "Self-Regulating Plant Watering Stake",
    "one_sentence_summary": "A soil stake that senses moisture and releases water from a reservoir only when the soil is dry.",
    "problem_statement": (
        "Houseplants die when owners forget to water them or overwater them while traveling; "
        "existing timers water on a schedule regardless of actual soil conditions."
    ),
    "what_is_new": (
        "The stake opens its valve using a moisture-swelling polymer, so it regulates watering "
        "without electronics, batteries, or a schedule."
    ),
    "core_components": "Reservoir bottle; hollow ceramic stake; polymer disc valve; adjustable collar.",
    "system_overview": (
        "Water flows from the inverted bottle into the stake. When the soil dries, the polymer disc "
        "contracts and opens the valve; as the soil wets, the disc swells and closes it again."
    ),
    "advantages": "No power needed, waters by need not by time, and works with any standard bottle.",
}


async def seed_data():
    async with AsyncSessionLocal() as session:
        project = await session.get(Project, DEMO_PROJECT_ID)
        if not project:
            print("Creating demo project...")
            project = Project(
                id=DEMO_PROJECT_ID,
                title="Plant Watering Stake",
                owner_id=DEMO_OWNER_ID,
                intake_notes=(
                    "Ceramic stake + upside-down bottle. Polymer disc swells when wet and closes the "
                    "outlet, shrinks when dry and lets water through. No batteries."
                ),
            )
            session.add(project)
            await session.commit()

        await ProjectService(session).save_answers(DEMO_PROJECT_ID, DEMO_ANSWERS)
        print(f"Demo project ready: {DEMO_PROJECT_ID}")


if __name__ == "__main__":
    asyncio.run(seed_data())
