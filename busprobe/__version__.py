__title__ = 'busprobe'
__description__ = 'Query MPRIS media players over the DBus session bus'
__version__ = '0.1.0'
__author__ = 'busprobe contributors'
__author_email__ = ''
__url__ = ''
__copyright__ = 'Copyright 2026 busprobe contributors'
