from semver_bump_check import cli

cli.run()
