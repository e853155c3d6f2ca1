from omd_build.runner import main

main()
