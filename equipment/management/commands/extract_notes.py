"""
批量处理 physician note 文件：读文件 -> 规则提取 -> 发送下游
运行:
    python manage.py extract_notes                  # 处理 BASE_INPUT_DIRECTORY 下所有 *.txt
    python manage.py extract_notes a.txt b.json     # 只处理指定文件
    python manage.py extract_notes --no-send        # 只提取，不发送
"""
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from equipment.services import process_note_file


class Command(BaseCommand):
    help = '从 physician note 文件提取 DME 订单数据并发送到下游 API'

    def add_arguments(self, parser):
        parser.add_argument('files', nargs='*', help='要处理的 note 文件；为空时扫描输入目录')
        parser.add_argument('--dir', dest='input_dir', default=None, help='输入目录，默认 settings.BASE_INPUT_DIRECTORY')
        parser.add_argument('--no-send', action='store_true', help='只提取，不发送到下游 API')

    def _discover_files(self, input_dir):
        base = Path(input_dir).resolve()
        if not base.is_dir():
            raise CommandError(f'Base input directory not found: {base}')
        files = sorted(str(p) for p in base.glob('*.txt'))
        self.stdout.write(f'Processing {len(files)} .txt file(s) from: {base}')
        return files

    def handle(self, *args, **options):
        files = [f for f in options['files'] if f and f.strip()]
        if files:
            self.stdout.write(f'Processing {len(files)} file(s) from command line arguments.')
        else:
            files = self._discover_files(options['input_dir'] or settings.BASE_INPUT_DIRECTORY)

        send = not options['no_send']
        failed = 0
        for file_name in files:
            try:
                exit_code = process_note_file(file_name, send=send)
            except Exception as e:
                self.stderr.write(f'处理出错 {file_name}: {e}')
                exit_code = 1
            if exit_code == 0:
                self.stdout.write(f'OK    {file_name}')
            else:
                failed += 1
                self.stderr.write(f'FAIL  {file_name}')

        self.stdout.write(f'Done: {len(files) - failed} succeeded, {failed} failed')
        if failed:
            raise CommandError(f'{failed} file(s) failed', returncode=1)
