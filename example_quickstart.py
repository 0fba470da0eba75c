"""
Keypager Quick Start Example

A simple example of keyset pagination over an in-memory collection.

Features covered:
- Build page requests
- Compile plans and render them for SQL
- Walk pages forward and backward with cursors

Run with: python example_quickstart.py
"""

from keypager import (
    Direction,
    OrderKey,
    PageRequest,
    compile_plan,
    decode_cursor,
    encode_cursor,
)
from keypager.backends.memory import paginate
from keypager.backends.sql import render_sql


# ============================================================================
# 1. SAMPLE DATA
# ============================================================================

EVENTS = [{"id": i, "kind": "deploy" if i % 3 == 0 else "build"} for i in range(1, 12)]


def main():
    """Run the quickstart example."""

    # ========================================================================
    # 2. COMPILE A PLAN
    # ========================================================================

    print("📋 Compiling 'last 3 before id=9'...")
    request = PageRequest(last=3, before=decode_cursor(encode_cursor(9)), order_by=[OrderKey("id")])
    plan = compile_plan(request)
    print(f"   predicate: {plan.predicate}")
    print(f"   order: {[(k.field, k.direction.value) for k in plan.order]}")
    print(f"   fetch limit: {plan.limit}")

    args = render_sql(plan)
    print(f"   SQL: {args.append_all('SELECT * FROM events')}  params={args.params}\n")

    # ========================================================================
    # 3. WALK FORWARD
    # ========================================================================

    print("➡️  Forward, 4 per page:")
    after = None
    while True:
        page = paginate(EVENTS, PageRequest(first=4, after=after))
        print(f"   {[e['id'] for e in page.rows]}  next={page.has_next_page}")
        if not page.has_next_page:
            break
        after = decode_cursor(encode_cursor(page.end_row["id"]))

    # ========================================================================
    # 4. WALK BACKWARD, NEWEST FIRST
    # ========================================================================

    print("\n⬅️  Backward, newest first, 4 per page:")
    order = [OrderKey("id", Direction.DESCENDING)]
    before = None
    while True:
        page = paginate(EVENTS, PageRequest(last=4, before=before, order_by=order))
        print(f"   {[e['id'] for e in page.rows]}  previous={page.has_previous_page}")
        if not page.has_previous_page:
            break
        before = decode_cursor(encode_cursor(page.start_row["id"]))


if __name__ == "__main__":
    main()
