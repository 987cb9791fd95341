"""Tests for sensors and sensor composition."""

import pytest

from t4dsense.core.validation import ValidationError
from t4dsense.encoding.base import DecodeNotSupportedError
from t4dsense.encoding.composite import ConcatEncoder, ensplat
from t4dsense.encoding.scalar import CategoryEncoder, LinearEncoder
from t4dsense.encoding.spatial import CoordinateEncoder
from t4dsense.selectors import KeySelector, PathSelector, TupleSelector
from t4dsense.sensors import Sensor, compose, decode_components


@pytest.fixture
def speed():
    return LinearEncoder(200, 20, lower=0, upper=40)


@pytest.fixture
def gear():
    return CategoryEncoder(60, ["low", "mid", "high"])


class TestSensor:
    """Tests for single selector/encoder pairs."""

    def test_sense(self, speed):
        sensor = Sensor(KeySelector("speed"), speed)
        assert sensor.sense({"speed": 12.0}) == speed.encode(12.0)

    def test_missing_value_is_empty(self, speed):
        sensor = Sensor(KeySelector("speed"), speed)
        assert sensor.sense({}) == frozenset()

    def test_decode_delegates(self, gear):
        sensor = Sensor(KeySelector("gear"), gear)
        votes = {b: 1.0 for b in sensor.sense({"gear": "high"})}
        assert sensor.decode(votes, n=1)[0].value == "high"

    def test_decode_unsupported(self):
        sensor = Sensor(PathSelector(("cell",)), CoordinateEncoder(100, 5, (1.0, 1.0), (2, 2)))
        with pytest.raises(DecodeNotSupportedError):
            sensor.decode({0: 1.0})


class TestCompose:
    """Tests for composing sensors."""

    @pytest.fixture
    def sensor(self, speed, gear):
        return compose([
            (KeySelector("speed"), speed),
            (KeySelector("gear"), gear),
        ])

    def test_structure(self, sensor):
        assert isinstance(sensor.selector, TupleSelector)
        assert isinstance(sensor.encoder, ConcatEncoder)
        assert sensor.encoder.size == 260

    def test_sense_is_aligned_union(self, sensor, speed, gear):
        bits = sensor.sense({"speed": 12.5, "gear": "mid"})
        expected = speed.encode(12.5) | frozenset(b + 200 for b in gear.encode("mid"))
        assert bits == expected

    def test_partial_state(self, sensor, gear):
        bits = sensor.sense({"gear": "low"})
        assert bits == frozenset(b + 200 for b in gear.encode("low"))

    def test_decode_components(self, sensor):
        bits = sensor.sense({"speed": 30, "gear": "high"})
        speeds, gears = decode_components(sensor, {b: 1.0 for b in bits}, n=2)
        assert speeds[0].value == 30.0
        assert gears[0].value == "high"

    def test_decode_components_single(self, gear):
        sensor = Sensor(KeySelector("gear"), gear)
        votes = {b: 1.0 for b in gear.encode("low")}
        (results,) = decode_components(sensor, votes, n=1)
        assert results[0].value == "low"

    def test_splat_component(self, gear):
        sensor = compose([(KeySelector("gears"), ensplat(gear))])
        assert sensor.sense({"gears": ["low", "high"]}) == gear.encode("low") | gear.encode("high")

    def test_empty(self):
        with pytest.raises(ValidationError):
            compose([])
