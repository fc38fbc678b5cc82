# Only uppercase letters and dashes make up a command name; Outlook and Google
# both stick to that, so anything else is treated as an unsplittable line
patterns = {"name": r"[A-Z\-]+", "basic_datetime": "[0-9]+T[0-9]+"}

# a content line, split at the first colon
patterns["line_colon"] = r"^(?P<name> {name!s} ) : (?P<value> .* )$".format(**patterns)

# fallback for producers that put a semicolon where the colon belongs
# (ATTENDEE, ORGANIZER and TRIGGER from Outlook)
patterns["line_semicolon"] = r"^(?P<name> {name!s} ) ; (?P<value> .* )$".format(**patterns)

# CN=Jane Doe;ROLE=REQ-PARTICIPANT:mailto:jane.doe@bar.com
patterns["person"] = r"""
^ (?: (?P<params> .* ) : )?     # attribute list (may be absent)
  mailto: (?P<email> .* ) $     # address
"""
patterns["person_param"] = r"^(?P<key> {name!s} ) = (?P<value> .* )$".format(**patterns)

# TZID=Pacific Standard Time:20290303T060000
patterns["datetime_tzid"] = r"""
^ TZID= "? (?P<tzid> [^:"]+ ) "? :        # timezone name, optionally quoted
  (?P<datetime> {basic_datetime!s} ) Z? $
""".format(
    **patterns
)

# 20230306T090000Z
patterns["datetime_floating"] = r"^(?P<datetime> {basic_datetime!s} ) Z? $".format(**patterns)

# LANGUAGE=en-US:lorem ipsum
patterns["text_language"] = r"^LANGUAGE= (?P<language> [a-zA-Z\-]+ ) : (?P<text> .* )$"

# RELATED=START:-PT15M
patterns["trigger"] = r"^RELATED= (?P<related> [A-Z]+ ) :-PT (?P<duration> .+ )$"

# TZOFFSETTO:-0800
patterns["offset"] = r"^(?P<sign> [+\-]? ) (?P<hours> [0-9]+ ) (?P<minutes> [0-5][0-9] )$"

# BYDAY=-1SU
patterns["byday"] = r"^(?P<nth> -?[0-9]+ ) (?P<weekday> [A-Z]+ )$"

# PT1H30M, P1D, -PT15M; each unit at most once, H, M and S only after T
patterns["duration"] = r"""
^ (?P<sign> [+\-]? ) P
  (?: (?P<weeks> [0-9]+ ) W )?
  (?: (?P<days> [0-9]+ ) D )?
  (?: T
      (?: (?P<hours> [0-9]+ ) H )?
      (?: (?P<minutes> [0-9]+ ) M )?
      (?: (?P<seconds> [0-9]+ ) S )?
  )? $
"""
