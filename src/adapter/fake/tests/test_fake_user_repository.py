"""Unit tests for FakeUserRepository: verifies Port contract compliance."""

import unittest

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateEmailError, DuplicateError
from domain.model.user import User


class TestFakeUserRepository(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    # ── create + lookups ──────────────────────────────────────

    async def test_create_assigns_sequential_ids(self):
        first = await self.repo.create(email='a@example.com')
        second = await self.repo.create(email='b@example.com')

        self.assertIsInstance(first, User)
        self.assertEqual((first.id, second.id), (1, 2))
        self.assertEqual(first.created_at, first.updated_at)

    async def test_lookups_by_unique_keys(self):
        user = await self.repo.create(
            email='a@example.com', google_id='g-1', email_confirm_token='c-1'
        )
        user.reset_password_token = 'r-1'
        await self.repo.save(user)

        self.assertEqual((await self.repo.get_by_email('a@example.com')).id, user.id)
        self.assertEqual((await self.repo.get_by_google_id('g-1')).id, user.id)
        self.assertEqual((await self.repo.get_by_email_confirm_token('c-1')).id, user.id)
        self.assertEqual((await self.repo.get_by_reset_password_token('r-1')).id, user.id)

    async def test_lookups_return_none_for_missing(self):
        self.assertIsNone(await self.repo.get_by_id(1))
        self.assertIsNone(await self.repo.get_by_email('x@example.com'))
        self.assertIsNone(await self.repo.get_by_google_id('g-x'))

    # ── uniqueness ────────────────────────────────────────────

    async def test_duplicate_email_rejected(self):
        await self.repo.create(email='a@example.com')

        with self.assertRaises(DuplicateEmailError):
            await self.repo.create(email='a@example.com')

    async def test_duplicate_google_id_rejected_on_save(self):
        await self.repo.create(email='a@example.com', google_id='g-1')
        other = await self.repo.create(email='b@example.com')
        other.google_id = 'g-1'

        with self.assertRaises(DuplicateError):
            await self.repo.save(other)

    # ── isolation ─────────────────────────────────────────────

    async def test_returned_users_are_copies(self):
        user = await self.repo.create(email='a@example.com', full_name='Ann')
        user.full_name = 'Changed'

        self.assertEqual((await self.repo.get_by_id(user.id)).full_name, 'Ann')


if __name__ == '__main__':
    unittest.main()
