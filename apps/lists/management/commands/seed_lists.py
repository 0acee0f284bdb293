from django.core.management.base import BaseCommand

from apps.core.errors import Conflict
from apps.core.store import EntityKind, get_store
from apps.identity.services import register_user
from apps.lists.services import create_list, create_task


class Command(BaseCommand):
    help = 'Seeds the entity store with a demo user, list and tasks'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='demo')
        parser.add_argument('--list-name', default='Groceries')

    def handle(self, *args, **options):
        store = get_store()
        username = options['username']
        list_name = options['list_name']

        try:
            register_user(store, username, 'password', f'{username}@example.com')
            self.stdout.write(self.style.SUCCESS(f'Created user: {username}'))
        except Conflict:
            self.stdout.write(self.style.WARNING(f'User exists: {username}'))

        if store.find_one(EntityKind.LIST, {'name': list_name, 'creator': username}):
            self.stdout.write(self.style.WARNING(f'List exists: {list_name}'))
        else:
            create_list(store, list_name, username, False)
            self.stdout.write(self.style.SUCCESS(f'Created list: {list_name}'))

        tasks = [
            {'name': 'Milk', 'task_id': f'{username}-milk'},
            {'name': 'Bread', 'task_id': f'{username}-bread'},
            {'name': 'Eggs', 'task_id': f'{username}-eggs'},
        ]

        for t in tasks:
            try:
                create_task(store, t['name'], list_name, False, t['task_id'])
                self.stdout.write(self.style.SUCCESS(f'Created task: {t["name"]}'))
            except Conflict:
                self.stdout.write(self.style.WARNING(f'Task exists: {t["name"]}'))
