"""test_schedule.py

测试 src/faas_placement_sim/schedule.py 中的 Invocation 类和 ExecutionSchedule 类
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from faas_placement_sim.schedule import ExecutionSchedule, Invocation, ScheduleData, reference_schedule


class TestInvocation:
    """测试 Invocation 类"""

    def test_init(self):
        inv = Invocation(invocation_id=0, function_type=2, arrival_time=3.0)
        assert inv.invocation_id == 0
        assert inv.function_type == 2
        assert inv.arrival_time == 3.0
        assert inv.host_id is None
        assert inv.warm is None
        assert inv.start_time is None
        assert inv.end_time is None
        assert inv.duration is None
        assert not inv.placed

    def test_negative_arrival_time(self):
        with pytest.raises(ValueError, match="Arrival time"):
            Invocation(invocation_id=0, function_type=0, arrival_time=-1.0)

    def test_place(self):
        inv = Invocation(invocation_id=0, function_type=2, arrival_time=3.0)
        inv.place(host_id=1, warm=True, start_time=3.0, end_time=4.0)

        assert inv.placed
        assert inv.host_id == 1
        assert inv.warm is True
        assert inv.start_time == 3.0
        assert inv.end_time == 4.0
        assert inv.duration == 1.0

    def test_place_twice(self):
        """测试同一个调用只能被放置一次"""
        inv = Invocation(invocation_id=0, function_type=2, arrival_time=3.0)
        inv.place(host_id=1, warm=True, start_time=3.0, end_time=4.0)
        with pytest.raises(RuntimeError, match="already been placed"):
            inv.place(host_id=0, warm=False, start_time=3.0, end_time=5.0)

    def test_place_before_arrival(self):
        inv = Invocation(invocation_id=0, function_type=2, arrival_time=3.0)
        with pytest.raises(ValueError, match="cannot be earlier than arrival time"):
            inv.place(host_id=0, warm=False, start_time=2.0, end_time=4.0)

    def test_place_end_before_start(self):
        inv = Invocation(invocation_id=0, function_type=2, arrival_time=3.0)
        with pytest.raises(ValueError, match="cannot be earlier than start time"):
            inv.place(host_id=0, warm=False, start_time=3.0, end_time=2.5)
        assert not inv.placed

    def test_reset(self):
        inv = Invocation(invocation_id=0, function_type=2, arrival_time=3.0)
        inv.place(host_id=1, warm=True, start_time=3.0, end_time=4.0)
        inv.reset()
        assert not inv.placed
        assert inv.warm is None
        inv.place(host_id=0, warm=False, start_time=3.0, end_time=5.0)
        assert inv.host_id == 0


class TestExecutionSchedule:
    """测试 ExecutionSchedule 类"""

    def test_from_pairs(self):
        schedule = ExecutionSchedule.from_pairs([(0, 0.0), (1, 2.0)])
        assert len(schedule) == 2
        assert schedule[0].function_type == 0
        assert schedule[1].arrival_time == 2.0
        assert not any(inv.placed for inv in schedule)

    def test_ids_follow_insertion_order(self):
        schedule = ExecutionSchedule([(5, 1.0), (3, 0.0), (5, 0.5)])
        assert [inv.invocation_id for inv in schedule] == [0, 1, 2]

    def test_empty_schedule(self):
        schedule = ExecutionSchedule([])
        assert len(schedule) == 0
        assert schedule.is_sorted

    def test_sort_preserves_length(self):
        schedule = ExecutionSchedule([(0, 6.0), (1, 0.0), (2, 3.0), (3, 0.0)])
        schedule.sort()
        assert len(schedule) == 4
        assert schedule.is_sorted
        assert [inv.arrival_time for inv in schedule] == [0.0, 0.0, 3.0, 6.0]

    def test_sort_is_stable(self):
        """测试到达时间相同的调用保持插入顺序"""
        schedule = ExecutionSchedule([(9, 1.0), (4, 0.0), (7, 1.0), (1, 0.0), (3, 1.0)])
        schedule.sort()
        assert [inv.function_type for inv in schedule] == [4, 1, 9, 7, 3]
        assert [inv.invocation_id for inv in schedule] == [1, 3, 0, 2, 4]

    def test_is_sorted(self):
        assert ExecutionSchedule([(0, 0.0), (1, 0.0), (2, 1.0)]).is_sorted
        assert not ExecutionSchedule([(0, 1.0), (1, 0.0)]).is_sorted

    def test_invocations_is_tuple(self):
        schedule = ExecutionSchedule([(0, 0.0)])
        assert isinstance(schedule.invocations, tuple)
        assert schedule.invocations[0] is schedule[0]

    def test_reset(self):
        schedule = ExecutionSchedule([(0, 0.0), (1, 0.0)])
        schedule[0].place(host_id=0, warm=False, start_time=0.0, end_time=2.0)
        schedule.reset()
        assert not any(inv.placed for inv in schedule)

    def test_negative_arrival_time(self):
        with pytest.raises(ValueError):
            ExecutionSchedule([(0, -0.5)])


class TestReferenceSchedule:
    """测试参考场景的执行计划"""

    def test_reference_schedule(self):
        schedule = reference_schedule()
        pairs = [(inv.function_type, inv.arrival_time) for inv in schedule]
        assert pairs == [(0, 0.0), (1, 0.0), (2, 0.0), (3, 0.0), (4, 0.0), (5, 0.0), (2, 3.0), (4, 6.0)]
        assert schedule.is_sorted

    def test_matches_yaml_data(self):
        """测试 tests/data 中的 YAML 执行计划与参考场景一致"""
        path = Path(__file__).parent / "data" / "reference_schedule.yaml"
        from_yaml = ExecutionSchedule.from_yaml(str(path))
        expected = reference_schedule()

        assert [(inv.function_type, inv.arrival_time) for inv in from_yaml] == [
            (inv.function_type, inv.arrival_time) for inv in expected
        ]


class TestScheduleFromYaml:
    """测试从 YAML 文件加载执行计划"""

    def test_from_yaml(self, tmp_path: Path):
        path = tmp_path / "schedule.yaml"
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                {"invocations": [{"function_type": 1, "arrival_time": 2.0}, {"function_type": 0, "arrival_time": 0.0}]},
                f,
            )

        schedule = ExecutionSchedule.from_yaml(str(path))
        assert len(schedule) == 2
        assert not schedule.is_sorted
        assert schedule[0].function_type == 1

    def test_empty_yaml(self, tmp_path: Path):
        """测试空的执行计划文件抛出校验错误"""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ValidationError):
            ExecutionSchedule.from_yaml(str(path))

    def test_missing_field(self, tmp_path: Path):
        path = tmp_path / "schedule.yaml"
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"invocations": [{"function_type": 1}]}, f)

        with pytest.raises(ValidationError):
            ExecutionSchedule.from_yaml(str(path))

    def test_negative_values(self):
        with pytest.raises(ValidationError):
            ScheduleData(invocations=[{"function_type": -1, "arrival_time": 0.0}])  # type: ignore
        with pytest.raises(ValidationError):
            ScheduleData(invocations=[{"function_type": 0, "arrival_time": -2.0}])  # type: ignore

    def test_from_data(self):
        data = ScheduleData(invocations=[{"function_type": 3, "arrival_time": 1.5}])  # type: ignore
        schedule = ExecutionSchedule.from_data(data)
        assert schedule[0].function_type == 3
        assert schedule[0].arrival_time == 1.5
