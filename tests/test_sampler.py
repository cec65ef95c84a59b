import pytest

from darkbrem.library import OutgoingKinematics
from darkbrem.sampler import MAX_ITERATIONS, EventSampler
from darkbrem.vectors import LorentzVector


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def event(energy, tag):
    lepton = LorentzVector(float(tag), 0.0, 1.0, 2.0)
    return OutgoingKinematics(lepton, lepton, energy)


def make_library():
    return {
        74: {
            4.0: [event(4.0, i) for i in range(3)],
            8.0: [event(8.0, 10 + i) for i in range(5)],
        },
        29: {
            4.0: [event(4.0, 100 + i) for i in range(2)],
        },
    }


def test_picks_closest_energy_above():
    sampler = EventSampler(make_library(), FixedRandom(0.0))
    assert sampler.sample(74, 5.0).incident_energy == 8.0
    assert sampler.sample(74, 3.0).incident_energy == 4.0
    assert sampler.sample(74, 4.0).incident_energy == 4.0


def test_energy_above_all_uses_highest():
    sampler = EventSampler(make_library(), FixedRandom(0.0))
    assert sampler.sample(74, 50.0).incident_energy == 8.0


def test_picks_closest_z_above():
    sampler = EventSampler(make_library(), FixedRandom(0.0))
    assert sampler.sample(20, 4.0).lepton.px >= 100
    assert sampler.sample(30, 4.0).lepton.px < 100
    assert sampler.sample(90, 4.0).lepton.px < 100


def test_walks_in_order_and_wraps():
    sampler = EventSampler(make_library(), FixedRandom(0.0))
    tags = [sampler.sample(74, 4.0).lepton.px for _ in range(7)]
    assert tags == [0.0, 1.0, 2.0, 0.0, 1.0, 2.0, 0.0]


def test_random_start_position():
    sampler = EventSampler(make_library(), FixedRandom(0.99))
    tags = [sampler.sample(74, 8.0).lepton.px for _ in range(3)]
    assert tags == [14.0, 10.0, 11.0]


def test_max_iterations_is_smallest_bin():
    sampler = EventSampler(make_library(), FixedRandom(0.5))
    assert sampler.max_iterations == 2


def test_max_iterations_capped():
    lib = {1: {1.0: [event(1.0, 0)] * (MAX_ITERATIONS + 5)}}
    sampler = EventSampler(lib, FixedRandom(0.0))
    assert sampler.max_iterations == MAX_ITERATIONS


def test_make_placeholders_resets_positions():
    sampler = EventSampler(make_library(), FixedRandom(0.0))
    sampler.sample(74, 4.0)
    sampler.sample(74, 4.0)
    sampler.make_placeholders()
    assert sampler.sample(74, 4.0).lepton.px == 0.0


def test_every_event_visited_once_per_cycle():
    lib = make_library()
    sampler = EventSampler(lib)
    drawn = [sampler.sample(74, 8.0) for _ in range(5)]
    assert sorted(e.lepton.px for e in drawn) == sorted(
        e.lepton.px for e in lib[74][8.0]
    )


def test_empty_library_raises():
    sampler = EventSampler({}, FixedRandom(0.0))
    with pytest.raises(LookupError):
        sampler.sample(74, 4.0)


def test_empty_bin_raises():
    sampler = EventSampler({74: {4.0: []}}, FixedRandom(0.0))
    with pytest.raises(IndexError):
        sampler.sample(74, 4.0)