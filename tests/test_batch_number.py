from hostel_laundry.services.laundry.batch_number import BatchNumberGenerator


def test_batch_number_is_lb_plus_epoch_millis():
    generator = BatchNumberGenerator(clock=lambda: 1718000000.123)
    assert generator.next() == "LB1718000000123"


def test_numbers_stay_unique_within_one_millisecond():
    generator = BatchNumberGenerator(clock=lambda: 1718000000.5)
    numbers = [generator.next() for _ in range(5)]
    assert len(set(numbers)) == 5
    assert numbers == sorted(numbers)


def test_clock_going_backwards_still_increases():
    ticks = iter([2000.0, 1000.0])
    generator = BatchNumberGenerator(clock=lambda: next(ticks))
    first, second = generator.next(), generator.next()
    assert int(second[2:]) == int(first[2:]) + 1
