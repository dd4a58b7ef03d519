"""
Stress tests / adversarial evaluation of treediff.

This script attempts to BREAK the claimed properties:
  1. Identity (diff(t, t) is empty, projection is the plain tree)
  2. Projection fidelity (unmarked projection of diff(a, b) reads as b)
  3. Position agreement between diff and render on deep and wide trees
  4. Key blindness
  5. Edge cases (removed / replaced subtrees in front of later patches)
"""

import sys, os, random, time
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from treediff.core import make_node, diff, Remove, Update
from treediff.render import render_entries, render_lines, render_tree, CHANGE_MARKER
from treediff.formats import describe


def test(name, condition, detail=""):
    status = "PASS" if condition else "FAIL"
    print(f"  [{status}] {name}" + (f"  ({detail})" if detail else ""))
    return condition


def random_tree(rng, depth=0, max_depth=5, alphabet="abc", key_prob=0.3):
    value = rng.choice(alphabet)
    key = rng.choice(["k1", "k2"]) if rng.random() < key_prob else None
    if depth >= max_depth:
        return make_node(value, key)
    width = rng.choice([0, 0, 1, 2, 3, 4])
    return make_node(value, key, [random_tree(rng, depth + 1, max_depth, alphabet, key_prob)
                                  for _ in range(width)])


def projection_matches(a, b):
    entries = render_entries(a, diff(a, b))
    return [line for line, _ in entries] == render_tree(b)


rng = random.Random(1234)
all_pass = True


# ═══════════════════════════════════════════════════════════════
#  §1  IDENTITY
# ═══════════════════════════════════════════════════════════════

print("=" * 70)
print("  §1  IDENTITY")
print("=" * 70)

failures = 0
for _ in range(500):
    t = random_tree(rng)
    if diff(t, t) or render_lines(t, {}) != render_tree(t):
        failures += 1
all_pass &= test("diff(t, t) == {} over 500 random trees", failures == 0,
                 f"{failures} failures")


# ═══════════════════════════════════════════════════════════════
#  §2  PROJECTION FIDELITY
# ═══════════════════════════════════════════════════════════════

print("\n" + "=" * 70)
print("  §2  PROJECTION FIDELITY")
print("=" * 70)

failures = 0
total_patches = 0
t0 = time.perf_counter()
for _ in range(2000):
    a = random_tree(rng)
    b = random_tree(rng)
    total_patches += len(diff(a, b))
    if not projection_matches(a, b):
        failures += 1
elapsed = time.perf_counter() - t0
all_pass &= test("unmarked projection == render(b) over 2000 random pairs",
                 failures == 0, f"{failures} failures, {total_patches} patches, {elapsed:.2f}s")


# ═══════════════════════════════════════════════════════════════
#  §3  DEEP AND WIDE TREES
# ═══════════════════════════════════════════════════════════════

print("\n" + "=" * 70)
print("  §3  DEEP AND WIDE TREES")
print("=" * 70)

wide_a = make_node("root", None, [make_node(i) for i in range(5000)])
wide_b = make_node("root", None, [make_node(i if i % 7 else -i) for i in range(6000)])
patches = diff(wide_a, wide_b)
all_pass &= test("wide: 1 insert + every 7th child updated",
                 len(patches) == 1 + len([i for i in range(1, 5000) if i % 7 == 0]))
all_pass &= test("wide: projection matches", projection_matches(wide_a, wide_b))

deep_a = make_node("leaf")
deep_b = make_node("LEAF")
for level in range(2000):
    deep_a = make_node(level, None, [deep_a])
    deep_b = make_node(level, None, [deep_b])
patches = diff(deep_a, deep_b)
all_pass &= test("deep: single update at the bottom", list(patches) == [2000],
                 f"got {list(patches)}")
all_pass &= test("deep: projection matches", projection_matches(deep_a, deep_b))


# ═══════════════════════════════════════════════════════════════
#  §4  KEY BLINDNESS
# ═══════════════════════════════════════════════════════════════

print("\n" + "=" * 70)
print("  §4  KEY BLINDNESS")
print("=" * 70)

a = make_node("root", None, [make_node("x", "x"), make_node("y", "y")])
b = make_node("root", None, [make_node("y", "y"), make_node("x", "x")])
all_pass &= test("keyed swap is two updates, not a move",
                 describe(diff(a, b)) == ["1 update y", "2 update x"],
                 f"got {describe(diff(a, b))}")


# ═══════════════════════════════════════════════════════════════
#  §5  EDGE CASES
# ═══════════════════════════════════════════════════════════════

print("\n" + "=" * 70)
print("  §5  EDGE CASES")
print("=" * 70)

# A large removed subtree in front of a later update
big = random_tree(random.Random(7), max_depth=6)
a = make_node("root", None, [make_node("p", None, [make_node("p1"), big]), make_node("r")])
b = make_node("root", None, [make_node("p", None, [make_node("p1")]), make_node("r2")])
patches = diff(a, b)
all_pass &= test("removed subtree consumes one position",
                 patches == {3: Remove(), 4: Update(b.children[1])},
                 f"got {patches}")
all_pass &= test("later update still lands", render_lines(a, patches)[-1] == "  r2" + CHANGE_MARKER)

# Empty-children root vs wide root
a = make_node("root")
b = make_node("root", None, [make_node(i) for i in range(10)])
all_pass &= test("all children batched into one insert", list(diff(a, b)) == [0])


print("\n" + "=" * 70)
print(f"  RESULT: {'ALL PASS' if all_pass else 'FAILURES DETECTED'}")
print("=" * 70)
sys.exit(0 if all_pass else 1)
