#!/usr/bin/env python3
"""
Complete Pipeline Demo: Source → Resolution → Analysis → Diagrams → Output

Shows the full workflow on the bundled example Resolutions:
1. Parse each source into a Resolution
2. Analyze it
3. Generate Graphviz diagrams
4. Evaluate it and print what it publishes
"""

from whereas.analyzer import analyze_resolution
from whereas.backends import DotMode, generate_dot, save_dot_file
from whereas.evaluator import evaluate
from whereas.examples import ALL_EXAMPLES
from whereas.parser import parse_string
from whereas.serialization import resolution_to_yaml
from whereas.values import Environment


def main():
    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: Source → Resolution → Analysis → Diagrams")
    print("=" * 80)

    for name, source in ALL_EXAMPLES.items():
        print(f"\n### {name}")

        # =====================================================================
        # STEP 1: Parse
        # =====================================================================
        print("\n1. PARSING...")
        resolution = parse_string(source)
        print(f"   ✓ Whereas statements: {len(resolution.whereas_stmts)}")
        print(f"   ✓ Resolved statements: {len(resolution.resolved_stmts)}")

        # =====================================================================
        # STEP 2: Analyze
        # =====================================================================
        print("\n2. ANALYZING...")
        report = analyze_resolution(resolution)
        print(f"   ✓ Declared: {report.declared_names}")
        print(f"   ✓ Max expression depth: {report.max_expression_depth}")
        for warning in report.warnings:
            print(f"      - {warning}")

        # =====================================================================
        # STEP 3: Diagrams
        # =====================================================================
        print("\n3. GENERATING DIAGRAMS...")
        for mode in DotMode:
            filename = f"{name}_{mode.value}.dot"
            save_dot_file(resolution, filename, mode=mode)
            print(f"   ✓ Saved {filename}")

        # =====================================================================
        # STEP 4: Evaluate
        # =====================================================================
        print("\n4. PUBLISHED:")
        evaluate(resolution, Environment(), emit=lambda line: print(f"   {line}"))

    print("\n5. SAMPLE AST (inventory, YAML):")
    print("-" * 80)
    print(resolution_to_yaml(parse_string(ALL_EXAMPLES["inventory"])))

    print("6. SAMPLE DATAFLOW OUTPUT (conditional):")
    print("-" * 80)
    print(generate_dot(parse_string(ALL_EXAMPLES["conditional"]), mode=DotMode.DATAFLOW))

    print("\n" + "=" * 80)
    print("PIPELINE COMPLETE!")
    print("\nTo visualize the diagrams:")
    print("  dot -Tpng inventory_dataflow.dot -o inventory_dataflow.png")
    print("=" * 80)


if __name__ == "__main__":
    main()
