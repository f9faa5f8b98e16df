import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.append(str(PROJECT_ROOT / "src"))

from faas_placement_sim import PlacementConfig, PlacementEngine, reference_schedule
from faas_placement_sim.report import dump_placements_json, format_decision, format_memory_usage, format_warm_status

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# 配置文件路径 (不存在时使用默认配置)
config_file = PROJECT_ROOT / "tests" / "data" / "placement_config.yaml"
config = PlacementConfig.from_yaml(str(config_file)) if config_file.exists() else PlacementConfig()

schedule = reference_schedule()
schedule.sort()

engine = PlacementEngine(config)

# 逐个放置调用，并打印每次放置之后的预热状态和内存占用
for invocation in schedule:
    decision = engine.place(invocation)
    print()
    print(format_decision(decision))
    print(format_warm_status(decision.start_time, engine.hosts, engine.warm_pool, config.warm_window))
    print(format_memory_usage(decision.start_time, engine.hosts, engine.ledger))

print()
print(f"Placed {len(schedule)} invocations on {len(engine.hosts)} hosts")

if len(sys.argv) > 1:
    dump_placements_json(sys.argv[1], engine.decisions, engine.hosts)
    print(f"Placements written to {sys.argv[1]}")
