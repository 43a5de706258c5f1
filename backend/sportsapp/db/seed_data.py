"""
Seed script for the drill catalogue - fifteen drills for every sport.
Existing drills are left alone, so it is safe to run repeatedly.
Usage: python -m sportsapp.db.seed_data
"""

import asyncio
from typing import Dict, List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sportsapp.core.database import get_session_local, init_db, close_db
from sportsapp.models.drill import Drill, SPORTS
import sportsapp.models  # noqa: F401

DRILLS: Dict[str, List[Tuple[str, str]]] = {
    "Cricket": [
        ("Front Foot Defence", "Play a straight front foot defensive shot to ten deliveries."),
        ("Back Foot Punch", "Punch short-of-length balls through the off side off the back foot."),
        ("Cover Drive", "Drive half-volleys through cover with a high elbow and full follow-through."),
        ("Pull Shot", "Pull short deliveries in front of square while keeping the ball down."),
        ("Sweep Shot", "Sweep spin bowling from outside leg stump, head over the ball."),
        ("Straight Drive", "Drive full deliveries back past the bowler along the ground."),
        ("Run-Up Rhythm", "Bowl six balls focusing on a consistent, balanced run-up."),
        ("Yorker Accuracy", "Land six deliveries at the base of the stumps."),
        ("Off-Spin Flight", "Bowl six off-spinners with loop and dip above the eyeline."),
        ("Slip Catching", "Take twenty edges from a catching cradle or a thrown ball."),
        ("High Catch", "Judge and hold ten skied catches, hands reversed cup."),
        ("Ground Fielding Pick-Up", "Attack the ball, pick up cleanly and return to the keeper."),
        ("Direct Hit Throw", "Hit a single stump from twenty metres in five attempts."),
        ("Wicket Keeping Stance", "Hold a low stance and take ten deliveries cleanly."),
        ("Running Between Wickets", "Complete three twos with correct bat grounding on the turn."),
    ],
    "Football": [
        ("Inside Foot Passing", "Pass against a wall with the inside of each foot for one minute."),
        ("First Touch Control", "Cushion twenty lofted balls dead within one step."),
        ("Cone Dribbling", "Dribble through ten cones using both feet without touching them."),
        ("Juggling", "Keep the ball up with feet and thighs for as long as possible."),
        ("Shooting Technique", "Strike ten laces shots at goal from the edge of the box."),
        ("Weak Foot Finishing", "Score five goals using only your weaker foot."),
        ("Heading", "Head ten tossed balls on target, eyes open and neck firm."),
        ("Long Passing", "Hit ten lofted passes into a target zone thirty metres away."),
        ("Turning With The Ball", "Perform Cruyff, drag-back and outside hook turns at pace."),
        ("Shielding", "Protect the ball from a defender for ten seconds."),
        ("Crossing", "Deliver ten crosses from the byline into the six-yard box."),
        ("Penalty Kicks", "Take five penalties, picking a corner before the run-up."),
        ("Defensive Stance", "Jockey an attacker and stay goal-side for fifteen seconds."),
        ("Sprint With Ball", "Dribble thirty metres at full speed with close control."),
        ("Volleys", "Volley ten tossed balls on target with a locked ankle."),
    ],
    "Hockey": [
        ("Grip and Stance", "Show the correct grip and low athletic stance while moving."),
        ("Push Pass", "Push pass to a partner or rebound board twenty times."),
        ("Stopping the Ball", "Trap twenty passes dead on the open stick."),
        ("Indian Dribble", "Dribble forty metres using rapid open-reverse movements."),
        ("Reverse Stick Control", "Receive and carry the ball on the reverse stick."),
        ("Slap Hit", "Hit ten slap passes accurately to a target."),
        ("Drive", "Strike ten full drives with a flat stick face."),
        ("Aerial Flick", "Lift the ball over an obstacle five times."),
        ("Drag Flick", "Perform five drag flicks from the penalty corner spot."),
        ("Tackling", "Execute block tackles on open and reverse sides."),
        ("3D Skills", "Lift the ball over a stick on the ground while dribbling."),
        ("Eliminating a Defender", "Beat a stationary defender with a change of direction."),
        ("Penalty Corner Injection", "Inject ten accurate penalty corner pushes."),
        ("Shooting on the Run", "Shoot at goal from the circle edge at full speed."),
        ("Goal Side Recovery", "Sprint back and recover a defensive position."),
    ],
    "Badminton": [
        ("Grip Change", "Switch between forehand and backhand grips in rally play."),
        ("Ready Position", "Hold a split-step ready position between twenty shots."),
        ("High Serve", "Serve ten high serves landing at the back line."),
        ("Low Serve", "Serve ten low serves just over the net tape."),
        ("Overhead Clear", "Hit ten clears from baseline to baseline."),
        ("Smash", "Hit ten steep smashes into the midcourt."),
        ("Drop Shot", "Play ten drops landing in front of the service line."),
        ("Net Shot", "Tumble ten net shots tight to the tape."),
        ("Backhand Clear", "Clear from the rear backhand corner to the baseline."),
        ("Drive", "Exchange flat drives at mid-court for one minute."),
        ("Lift", "Lift from the forecourt to the back corners."),
        ("Footwork Six Corners", "Shadow all six court corners for one minute."),
        ("Defensive Block", "Block ten smashes to the net."),
        ("Jump Smash", "Hit five jump smashes with a balanced landing."),
        ("Around the Head", "Play ten round-the-head clears from the backhand side."),
    ],
    "Kabaddi": [
        ("Chant Breath Control", "Sustain a clear chant for a full thirty-second raid."),
        ("Raider Stance", "Hold a low, balanced raiding stance while moving."),
        ("Toe Touch", "Perform quick toe touches on both sides."),
        ("Hand Touch", "Execute fast hand touches and retreat."),
        ("Running Hand Touch", "Cover the court and land a running hand touch."),
        ("Bonus Line", "Cross the bonus line safely with the trailing foot raised."),
        ("Frog Jump", "Clear a crouching defender with a frog jump."),
        ("Dubki", "Escape under a chain by ducking at the right moment."),
        ("Ankle Hold", "Defend with a clean ankle hold."),
        ("Thigh Hold", "Defend with a secure thigh hold."),
        ("Chain Tackle", "Perform a coordinated two-player chain tackle."),
        ("Block", "Execute a front block on an incoming raider."),
        ("Dash", "Push a raider out of bounds with a controlled dash."),
        ("Escape to Mid Line", "Break a hold and reach the mid line."),
        ("Agility Ladder", "Complete an agility ladder pattern at speed."),
    ],
    "Athletics": [
        ("Sprint Start", "Explode from blocks or a crouch start five times."),
        ("30m Acceleration", "Record a timed thirty metre acceleration."),
        ("High Knees", "Perform high knees for twenty metres with tall posture."),
        ("Butt Kicks", "Perform heel flicks for twenty metres."),
        ("A-Skip", "Complete A-skips over thirty metres with rhythm."),
        ("Bounding", "Bound for thirty metres with full hip extension."),
        ("Standing Long Jump", "Record your best of three standing long jumps."),
        ("Hurdle Mobility", "Step over ten low hurdles with lead and trail leg drills."),
        ("Baton Exchange", "Perform an upsweep baton handover at speed."),
        ("Shot Put Glide", "Throw with a glide technique three times."),
        ("Javelin Crossover", "Show the five-step crossover into a release."),
        ("Long Jump Approach", "Run a consistent approach onto the take-off board."),
        ("Tempo Run", "Run six 100m repeats at controlled pace."),
        ("Core Stability", "Hold a plank sequence for two minutes."),
        ("Cool Down Routine", "Show a full stretching cool down."),
    ],
    "Tennis": [
        ("Continental Grip", "Show the continental grip for serve and volley."),
        ("Forehand Groundstroke", "Hit twenty crosscourt forehands."),
        ("Backhand Groundstroke", "Hit twenty crosscourt backhands."),
        ("Flat Serve", "Hit ten flat first serves into the box."),
        ("Kick Serve", "Hit ten kick second serves with margin over the net."),
        ("Return of Serve", "Return ten serves deep into the court."),
        ("Forehand Volley", "Volley ten balls with a short punch."),
        ("Backhand Volley", "Volley ten backhand balls with a firm wrist."),
        ("Overhead Smash", "Hit ten overheads from lobs."),
        ("Slice Backhand", "Hit ten low slice backhands."),
        ("Approach Shot", "Hit an approach and close the net."),
        ("Lob", "Lob ten balls over a net player."),
        ("Drop Shot", "Hit ten drop shots landing before the service line."),
        ("Split Step", "Split step on every opponent contact for a rally."),
        ("Recovery Footwork", "Recover to the centre mark after wide balls."),
    ],
}


async def seed_drills(session: AsyncSession) -> int:
    """Insert missing catalogue drills; returns how many were added"""
    result = await session.execute(select(Drill.sport, Drill.drill_number))
    existing = set(result.all())

    added = 0
    for sport in SPORTS:
        for number, (title, description) in enumerate(DRILLS[sport], start=1):
            if (sport, number) in existing:
                continue
            session.add(Drill(sport=sport, drill_number=number, title=title, description=description))
            added += 1

    await session.commit()
    return added


async def seed_database():
    await init_db()

    async with get_session_local()() as session:
        try:
            added = await seed_drills(session)
        except Exception as e:
            print(f"Error seeding database: {e}")
            await session.rollback()
            raise

    print(f"Successfully seeded drill catalogue: {added} drills added")
    await close_db()


def main():
    asyncio.run(seed_database())


if __name__ == "__main__":
    main()
