import unittest

from hamcrest import equal_to, is_, assert_that, is_not, calling, raises

from groundlink.support.mixins import CommonEqualityMixin, StringerMixin


class Sample(CommonEqualityMixin, StringerMixin):
    def __init__(self, a=None, b=None):
        self.a = a
        self.b = b


class StringerMixinTest(unittest.TestCase):
    def test_stringer(self):
        sut = Sample("123", 4.5)
        assert_that(str(sut), is_("Sample{'a': '123', 'b': 4.5}"))

    def test_stringer_none(self):
        assert_that(str(Sample()), is_("Sample{'a': None, 'b': None}"))


class CommonEqualityMixinTest(unittest.TestCase):

    def test_value_equivalence(self):
        e1 = Sample()
        e2 = Sample()
        e1.a = "COM3"
        e1.b = 57600
        e2.a = "COM" + "3"
        e2.b = 57600
        assert_that(e1, is_(equal_to(e2)))
        assert_that(e1 == e2, is_(True))
        assert_that(e1 != e2, is_(False))

        e1.b = 115200
        assert_that(e1, is_not(equal_to(e2)))
        assert_that(e1 != e2, is_(True))
        assert_that(e1 == e2, is_(False))

    def test_different_types_are_not_equal(self):
        assert_that(Sample() == object(), is_(False))

    def test_recursive_call(self):
        e1 = Sample()
        e2 = Sample()
        e2.a = e1
        e1.a = e2

        def compare():
            return e2 == e1

        assert_that(calling(compare), raises(ValueError))
