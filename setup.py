"""
vcalentry: module for reading calendar invitations

Description
-----------

Decodes the VCALENDAR attachments Outlook/Exchange and Google Calendar send
with meeting invitations into immutable Python data structures: event details,
participants, the alarm and the one timezone of the invitation. Every
timestamp is also converted to UTC using the daylight saving rules the
invitation itself carries.

Requirements
------------

Requires python 3.8 or later and dateutil 2.7.0 or later.
"""

from setuptools import setup, find_packages

doclines = (__doc__ or '').splitlines()

setup(name = "vcalentry",
      license = "Apache",
      zip_safe = True,
      entry_points = {
            'console_scripts': [
                  'calentry_dump = vcalentry.dump:main'
            ]
      },
      include_package_data = True,
      python_requires = ">=3.8",
      install_requires = ["python-dateutil >= 2.7.0"],
      extras_require = {"test": ["pytest"]},
      platforms = ["any"],
      packages = find_packages(exclude=["tests", "tests.*"]),
      description = "A Python package for decoding calendar invitations "
                    "sent by Outlook and Google Calendar",
      long_description = "\n".join(doclines[2:]),
      keywords = ['icalendar', 'ics', 'invitation', 'outlook', 'vevent'],
      classifiers =  """
      Development Status :: 4 - Beta
      Environment :: Console
      Intended Audience :: Developers
      License :: OSI Approved :: Apache Software License
      Natural Language :: English
      Operating System :: OS Independent
      Programming Language :: Python
      Programming Language :: Python :: 3
      Topic :: Text Processing""".strip().splitlines()
      )
