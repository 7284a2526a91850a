#!/usr/bin/env python3

import argparse
import yaml
from jyeditlib.core import utils
from jyeditlib.core.project import JianyingProject

#============================================

def parse_args():
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(description="JianYing Draft Editor")
	parser.add_argument('-y', '--yaml', dest='yamlfile', required=True,
		help='plan yaml file that lists the tracks and clips to insert')
	parser.add_argument('-d', '--draft-location', dest='draft_location',
		help='override drafts folder from yaml')
	parser.add_argument('-n', '--dry-run', dest='dry_run', action='store_true',
		help='validate only, do not create a draft')
	parser.add_argument('-p', '--dump-plan', dest='dump_plan', action='store_true',
		help='print track summary after planning without writing a draft')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='suppress progress and info messages')
	args = parser.parse_args()
	return args

#============================================

def main():
	args = parse_args()
	utils.set_quiet_mode(args.quiet)
	project = JianyingProject(args.yamlfile, draft_location=args.draft_location,
		dry_run=args.dry_run)
	if args.dump_plan:
		editor = project.build_in_memory()
		plan = {
			'duration': editor.document['duration'],
			'tracks': project.summarize_tracks(),
		}
		print(yaml.safe_dump(plan, sort_keys=False))
		return
	project.run()


if __name__ == '__main__':
	main()
