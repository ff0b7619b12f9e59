#!/usr/bin/env python3
"""
Demo scenario for the assignment tracker.
"""

import asyncio

from assignment_tracker.core.enums import ReportFormat
from assignment_tracker.main import AssignmentTracker


async def run_demo():
    """Walk a small class through release, work, reminders and grading."""
    print("=" * 60)
    print("ASSIGNMENT TRACKER - DEMO")
    print("=" * 60)

    config = {
        'work_delay': 0.5,
        'grading_delay': 0.5,
        'random_seed': 7,
    }

    tracker = AssignmentTracker(config)

    try:
        print("\n1. Enrolling students...")
        alice = tracker.enroll("Alice Smith", "alice@example.com")
        bob = tracker.enroll("Bob Jones", "bob@example.com")
        carol = tracker.enroll("Carol Davis", "carol@example.com")

        print("\n2. Releasing assignments in parallel...")
        await tracker.class_list.release_assignments_parallel(["A1", "A2"])

        print("\n3. Students start working...")
        alice.start_working("A1")
        bob.start_working("A2")
        carol.start_working("A1")

        print("\n4. Outstanding work...")
        print(f"  A1 outstanding: {tracker.class_list.find_outstanding_assignments('A1')}")
        print(f"  Any outstanding: {tracker.class_list.find_outstanding_assignments()}")

        print("\n5. Withdrawing a student mid-assignment...")
        tracker.withdraw("Carol Davis")
        print(f"  Carol's pending tasks after removal: {len(carol.pending_tasks)}")

        await asyncio.sleep(0.2)
        print("\n6. Sending a final reminder for A1...")
        tracker.class_list.send_reminder("A1")

        print("\n7. Waiting for grading to finish...")
        await tracker.wait_idle(timeout=5.0)

        print("\n8. Externally grading A2 for Alice...")
        alice.update_assignment_status("A2", 88)

        print("\n9. Results...")
        for student in tracker.class_list:
            print(f"  {student.full_name}: "
                  f"A1={student.get_assignment_status('A1')}, "
                  f"A2={student.get_assignment_status('A2')}, "
                  f"average={student.get_grade():.1f}")

        print("\n10. CSV report...")
        print(tracker.generate_report(ReportFormat.CSV))

        print("=" * 60)
        print("DEMO COMPLETED SUCCESSFULLY!")
        print("=" * 60)

    finally:
        tracker.shutdown()


if __name__ == "__main__":
    asyncio.run(run_demo())
